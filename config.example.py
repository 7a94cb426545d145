# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Timings are in seconds.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKFLOW_APP_NAME": "App display name (default: taskflow).",
    "TASKFLOW_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Local data (gitignored)
    "TASKFLOW_DATA_DIR": "Directory for the task blob and taskflow.log (default: .local/taskflow).",
    "TASKFLOW_STORE_KEY": "Name of the persisted blob, stored as <key>.json (default: workflow_sim_data).",
    # Workflow simulation
    "TASKFLOW_TRANSITION_DELAY_MIN": "Lower bound of simulated transition latency (default: 0.5).",
    "TASKFLOW_TRANSITION_DELAY_MAX": "Upper bound of simulated transition latency (default: 3.0).",
    "TASKFLOW_TRANSITION_FAILURE_RATE": "Probability a transition fails with a network error (default: 0.15).",
    "TASKFLOW_ENFORCE_TRANSITION_RULES": "Make the engine reject moves not in the transition table (default: false).",
    # Storage simulation
    "TASKFLOW_STORE_DELAY_MIN": "Lower bound of simulated storage latency (default: 0.1).",
    "TASKFLOW_STORE_DELAY_MAX": "Upper bound of simulated storage latency (default: 0.3).",
    # Board
    "TASKFLOW_RETRY_LIMIT": "Retry a failed transition this many times before reporting (default: 0).",
    "TASKFLOW_ERROR_LOG_SIZE": "How many recent failures /errors keeps (default: 50).",
    # Reproducible runs
    "TASKFLOW_RANDOM_SEED": "Seed for the latency/failure simulators (default: unset, random).",
}
