"""Label scanning workflows."""

from freshkeeper.application.labels.confirm import ConfirmLabelRequest, ConfirmLabelResult, run_confirm_label
from freshkeeper.application.labels.scan import (
    LabelScanRequest,
    LabelScanResult,
    LabelTextRequest,
    run_label_scan,
    run_label_text,
)

__all__ = [
    "ConfirmLabelRequest",
    "ConfirmLabelResult",
    "run_confirm_label",
    "LabelScanRequest",
    "LabelScanResult",
    "LabelTextRequest",
    "run_label_scan",
    "run_label_text",
]
