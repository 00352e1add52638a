"""
Training configuration for the Asteroids environment
"""

# Environment parameters
ENV_CONFIG = {
    # "render_mode": None,  # Don't render during training - it's too slow with parallel envs
    "width": 800,
    "height": 800,
    "max_steps": 3600,  # 60 seconds at 60 FPS
    "k_asteroids": 6,
    "starting_lives": 3,
    "starting_wave_size": 4,
    "wave_increment": 2,
    "max_wave_size": 12,
    "fire_cooldown_frames": 10,
    "bullet_ttl": 60,
    "invulnerability_frames": 120,
}

# ==============================================================================
# REWARD SHAPING
# ==============================================================================

REWARD_CONFIG = {
    "name": "baseline",
    "description": "Points and kills rewarded, lives lost and wasted shots penalised",
    "R_SCORE": 0.01,     # Per point scored (small rocks score most)
    "R_KILL": 0.5,       # Per asteroid destroyed
    "R_SHOT": 0.01,      # Penalty for shooting (encourage aiming)
    "R_LIFE": 5.0,       # Penalty per life lost
    "R_TIME": 0.001,     # Small time penalty
}

# ==============================================================================
# ALGORITHM HYPERPARAMETERS
# ==============================================================================

# PPO hyperparameters
PPO_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 3e-4,
    "n_steps": 2048,
    "batch_size": 256,
    "n_epochs": 10,
    "gamma": 0.99,
    "gae_lambda": 0.95,
    "clip_range": 0.2,
    "ent_coef": 0.01,
    "vf_coef": 0.5,
    "max_grad_norm": 0.5,
    "verbose": 1,
}

# DQN hyperparameters
DQN_CONFIG = {
    "policy": "MlpPolicy",
    "learning_rate": 1e-4,
    "buffer_size": 100_000,
    "learning_starts": 1000,
    "batch_size": 128,
    "tau": 1.0,
    "gamma": 0.99,
    "train_freq": 4,
    "gradient_steps": 1,
    "target_update_interval": 1000,
    "exploration_fraction": 0.1,
    "exploration_initial_eps": 1.0,
    "exploration_final_eps": 0.05,
    "verbose": 1,
}

# ==============================================================================
# TRAINING SETTINGS
# ==============================================================================

TRAINING_CONFIG = {
    "total_timesteps": 1_000_000,
    "save_freq": 20_000,
    "eval_freq": 10_000,
    "log_dir": "./logs",
    "model_dir": "./models",
    "tensorboard_log": "./tensorboard_logs",
}
