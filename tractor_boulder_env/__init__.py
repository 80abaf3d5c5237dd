from gymnasium.envs.registration import register

register(
     id='TractorBoulder-v0',
     entry_point='tractor_boulder_env.envs:TractorBoulderEnv',
)
