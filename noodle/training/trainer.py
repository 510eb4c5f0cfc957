"""Training loop for NeuralNetwork models."""

import os
import time

from tqdm import tqdm

from noodle.training.losses import dataset_loss
from noodle.utils.checkpointing import save_model
from noodle.utils.csv_logger import CSVLogger
from noodle.utils.metrics import binary_accuracy, evaluate, mse


class Trainer:
    """Per-sample SGD trainer with monitoring, CSV logging and checkpoints."""

    def __init__(self, network, inputs, targets, config, csv_path=None):
        """
        Args:
            network: NeuralNetwork to train (mutated in place)
            inputs: List of input vectors
            targets: List of target vectors
            config: Training configuration (see noodle.config.mlp_config.MLPConfig)
            csv_path: CSV log path (defaults to a timestamped file in config.log_dir)
        """
        if len(inputs) != len(targets):
            raise ValueError(f"Got {len(inputs)} inputs for {len(targets)} targets")
        self.network = network
        self.inputs = inputs
        self.targets = targets
        self.config = config

        self.learning_rate = getattr(config, 'learning_rate', network.learning_rate)
        self.log_every = max(1, getattr(config, 'log_every', 500))
        self.save_every = getattr(config, 'save_every', 0)
        self.checkpoint_dir = getattr(config, 'checkpoint_dir', 'checkpoints')
        self.threshold = getattr(config, 'accuracy_threshold', 0.5)
        self.show_progress = getattr(config, 'show_progress', True)

        self.best_train_loss = float('inf')
        self.cumulative_time = 0.0
        self.history = {'epoch': [], 'loss': [], 'acc': [], 'mse': []}

        if csv_path is None:
            log_dir = getattr(config, 'log_dir', 'logs')
            os.makedirs(log_dir, exist_ok=True)
            timestamp = time.strftime('%Y%m%d_%H%M%S')
            csv_path = os.path.join(log_dir, f'training_log_{timestamp}.csv')
        self.csv_path = csv_path
        self.csv_logger = CSVLogger(csv_path, config)
        print(f"CSV logging enabled: {csv_path}")

    def train_epoch(self):
        """
        One in-order pass of backpropagate() over every sample.

        Returns:
            loss: Mean half squared error, measured before each sample's update
        """
        self.network.learning_rate = self.learning_rate
        total = 0.0
        for x, t in zip(self.inputs, self.targets):
            total += self.network.backpropagate(x, t)
        return total / len(self.inputs) if self.inputs else 0.0

    def evaluate(self):
        """Accuracy and MSE of the current network on the training set."""
        acc = evaluate(self.network.predict, self.inputs, self.targets,
                       scorer=binary_accuracy, threshold=self.threshold)
        err = evaluate(self.network.predict, self.inputs, self.targets, scorer=mse)
        return acc, err

    def train(self, num_epochs=None):
        """
        Full training loop.

        Args:
            num_epochs: Number of epochs (defaults to config.num_epochs)

        Returns:
            history: Dict of logged epochs, losses, accuracies and MSEs
        """
        num_epochs = self.config.num_epochs if num_epochs is None else num_epochs
        print(f"\nStarting training for {num_epochs} epochs")
        print(f"Layers: {self.network.layer_sizes} | Samples: {len(self.inputs)} | LR: {self.learning_rate}")

        for _ in tqdm(range(num_epochs), desc="Training", disable=not self.show_progress):
            epoch_start_time = time.time()
            train_loss = self.train_epoch()
            self.network.epoch += 1
            epoch = self.network.epoch

            is_best_loss = train_loss < self.best_train_loss
            if is_best_loss:
                self.best_train_loss = train_loss

            checkpoint_path = ''
            if self.save_every and epoch % self.save_every == 0:
                checkpoint_path = os.path.join(self.checkpoint_dir, f'checkpoint_epoch_{epoch}.json')
                save_model(self.network, checkpoint_path)

            epoch_time = time.time() - epoch_start_time
            self.cumulative_time += epoch_time

            if epoch % self.log_every == 0:
                self._log(epoch, train_loss, is_best_loss, checkpoint_path, epoch_time)

        final_loss = dataset_loss(self.network, self.inputs, self.targets)
        acc, err = self.evaluate()
        print(f"--- Final: loss={final_loss:.6f} | acc={acc['metric']:.2f}% "
              f"({acc['correct']}/{acc['total']}) | mse={err['metric']:.6f}")
        return self.history

    def _log(self, epoch, train_loss, is_best_loss, checkpoint_path, epoch_time):
        acc, err = self.evaluate()
        self.history['epoch'].append(epoch)
        self.history['loss'].append(train_loss)
        self.history['acc'].append(acc['metric'])
        self.history['mse'].append(err['metric'])

        tqdm.write(f"Epoch {epoch:6d} | loss={train_loss:.6f} | "
                   f"acc={acc['metric']:6.2f}% ({acc['correct']}/{acc['total']}) | mse={err['metric']:.6f}")

        self.csv_logger.log_epoch(epoch, {
            'train_loss': train_loss,
            'train_mse': err['metric'],
            'train_acc': acc['metric'],
            'best_train_loss': self.best_train_loss,
            'is_best_loss': is_best_loss,
            'checkpoint_path': checkpoint_path,
            'num_neurons': self.network.count_neurons(),
            'learning_rate': self.learning_rate,
            'epoch_time_seconds': epoch_time,
            'cumulative_time_seconds': self.cumulative_time,
        })
