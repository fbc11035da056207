"""
Convergence criteria for clustering algorithms.

Both centroid and medoid algorithms stop once an iteration leaves every
cluster center where it was.
"""

from typing import Dict, Any

from ..base.interfaces import ConvergenceCriterion


class CenterChange(ConvergenceCriterion):
    """Convergence once no cluster center changes during an iteration."""

    def __init__(self, patience: int = 1):
        """
        Args:
            patience: Number of consecutive stable iterations required
        """
        super().__init__()
        if patience < 1:
            raise ValueError(f"patience must be at least 1, got {patience}")
        self.patience = patience
        self._stable_count = 0

    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if the centers stayed put.

        current_state must contain 'changed' (bool); 'n_changed' is recorded
        when present.
        """
        changed = bool(current_state['changed'])

        self.history.append({
            'iteration': current_state.get('iteration', len(self.history)),
            'changed': changed,
            'n_changed': current_state.get('n_changed'),
        })

        if changed:
            self._stable_count = 0
            return False
        self._stable_count += 1
        return self._stable_count >= self.patience

    def reset(self):
        super().reset()
        self._stable_count = 0
