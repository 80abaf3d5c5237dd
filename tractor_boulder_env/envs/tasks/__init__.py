from . import fixed_level_task, random_level_task
