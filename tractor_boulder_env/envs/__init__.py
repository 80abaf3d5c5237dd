from tractor_boulder_env.envs.tractor_boulder_env import TractorBoulderEnv
