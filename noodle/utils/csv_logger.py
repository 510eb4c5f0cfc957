"""Per-epoch CSV log of a NeuralNetwork training run."""

import csv
from datetime import datetime
from pathlib import Path


# Fixed column order; rows fill missing values with ''.
COLUMNS = (
    'timestamp', 'epoch',
    'train_loss', 'train_mse', 'train_acc', 'best_train_loss', 'is_best_loss',
    'checkpoint_path',
    'layer_sizes', 'activation', 'num_neurons',
    'learning_rate', 'dataset', 'seed',
    'epoch_time_seconds', 'cumulative_time_seconds',
)

# config attribute -> how it is rendered in a row
RUN_FIELDS = {
    'layer_sizes': lambda sizes: '-'.join(str(s) for s in sizes),
    'activation': str,
    'learning_rate': float,
    'dataset': str,
    'seed': lambda seed: '' if seed is None else seed,
}


class CSVLogger:
    """Appends one row per logged epoch; run settings are copied from the config."""

    def __init__(self, log_path, config):
        self.log_path = Path(log_path)
        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self.run_params = {
            name: render(getattr(config, name))
            for name, render in RUN_FIELDS.items()
            if hasattr(config, name)
        }

        # an existing log is appended to (resumed runs)
        if not self.log_path.exists():
            with open(self.log_path, 'w', newline='', encoding='utf-8') as f:
                csv.DictWriter(f, fieldnames=COLUMNS).writeheader()

    def log_epoch(self, epoch, metrics):
        """
        Write the row for `epoch`.

        Args:
            epoch: Network epoch counter after the epoch finished
            metrics: Values for the metric columns; they win over run settings
        """
        row = dict.fromkeys(COLUMNS, '')
        row.update(self.run_params)
        row.update({k: v for k, v in metrics.items() if k in row})
        row['epoch'] = epoch
        row['timestamp'] = datetime.now().strftime('%Y-%m-%d %H:%M:%S')

        with open(self.log_path, 'a', newline='', encoding='utf-8') as f:
            csv.DictWriter(f, fieldnames=COLUMNS).writerow(row)
