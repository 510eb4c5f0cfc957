"""Base configuration for all models."""

class BaseConfig:
    """Shared configuration across all models."""

    # Reproducibility
    seed = None  # None: fresh entropy on every run

    # Training loop
    log_every = 500        # Print and write a CSV row every N epochs
    save_every = 0         # Checkpoint every N epochs (0 disables periodic checkpoints)
    show_progress = True   # tqdm progress bar over epochs

    # Evaluation
    accuracy_threshold = 0.5

    # Paths
    checkpoint_dir = "checkpoints"
    log_dir = "logs"
    output_dir = "outputs"
