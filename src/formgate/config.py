"""Engine configuration.

FormgateConfig is a frozen dataclass — immutable after creation,
IDE-autocompletable, no string-key dict lookups. Per-field thresholds do
not live here; they are data in ``formgate.validation.catalog``.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class FormgateConfig:
    """Engine configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = FormgateConfig(autofill_delay=0.5, enable_validation=False)
    """

    # Validation
    enable_validation: bool = True

    # Autofill detection
    autofill_enabled: bool = True
    autofill_delay: float = 1.5  # seconds before an autofilled field counts as touched
    autofill_min_growth: int = 2  # a single change must add more than this many characters

    # Templates
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True
