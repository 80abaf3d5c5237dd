# scripts/test_env_rollout.py

import gymnasium as gym
import time
import traceback

# Import your environment package to register it
import tractor_boulder_env

# --- Test Configuration ---
ENV_ID = "TractorBoulder-v0"
# Specify a task config file if you don't want the env's default ('fixed_level.yaml')
# TASK_CONFIG_FILE = "random_level.yaml"
TASK_CONFIG_FILE = None
NUM_STEPS = 20

if __name__ == "__main__":
    print("Creating environment...")
    env = None
    env_kwargs = {'render_mode': 'ansi'}
    if TASK_CONFIG_FILE:
        env_kwargs['task_config_file'] = TASK_CONFIG_FILE
        print(f"Using Task Config: {TASK_CONFIG_FILE}")
    else:
        print("Using default task config from environment __init__.")

    try:
        env = gym.make(ENV_ID, **env_kwargs)
        print("Environment created successfully.")
        print(f"Observation Space: {env.observation_space}")
        print(f"Action Space: {env.action_space}")

        obs, info = env.reset(seed=0)
        print(f"Reset complete. Observation shape: {obs.shape}, Info: {info}")
        print(env.render())

        plan = env.unwrapped.plan()
        print(f"Shortest plan from start: {plan}")

        print(f"\nTaking {NUM_STEPS} random steps...")
        for i in range(NUM_STEPS):
            action = env.action_space.sample()
            obs, reward, terminated, truncated, info = env.step(action)
            if "error" in info:
                continue
            print(f"Step {i+1}, Action: {action} -> Reward: {reward:.3f}, Term: {terminated}, Info: {info}")
            print(env.render())
            if terminated or truncated:
                print("Episode ended early.")
                break
            time.sleep(0.1)

    except Exception:
        print(f"\n!!!!!! An error occurred during testing !!!!!!")
        print(traceback.format_exc())
    finally:
        if env is not None:
            print("\nClosing environment.")
            env.close()
