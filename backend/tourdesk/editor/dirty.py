import json
from typing import Any, Dict, Optional

from .form_state import FormState


def snapshot(values) -> str:
    """Canonical serialization; key order never matters."""
    return json.dumps(values, sort_keys=True, default=str)


class DirtyTracker:
    def __init__(self, form: FormState):
        self.form = form
        self._baseline = self.take_snapshot()

    def take_snapshot(self) -> str:
        values = self.form.as_dict()
        # Getting an id from draft creation is not a user edit
        values.pop("id", None)
        return snapshot(values)

    def mark_saved(self, baseline: Optional[str] = None) -> None:
        """
        Re-baseline after a load or a successful save. Pass the snapshot taken
        when the save started so edits made while it ran stay dirty.
        """
        self._baseline = baseline if baseline is not None else self.take_snapshot()

    def mark_fields_saved(self, saved: Dict[str, Any]) -> None:
        """
        Re-baseline only the fields of a partial save; every other field keeps
        its previous baseline value.
        """
        values = json.loads(self._baseline)
        values.update(json.loads(snapshot(saved)))
        values.pop("id", None)
        self._baseline = snapshot(values)

    def is_dirty(self) -> bool:
        if self.form.loading:
            return False
        return self.take_snapshot() != self._baseline
