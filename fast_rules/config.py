import os

# Default for Schema.validate(abort_early=None)
VALIDATION_ABORT_EARLY = os.getenv("VALIDATION_ABORT_EARLY", "false").strip().lower() in {"1", "true", "yes", "on"}
