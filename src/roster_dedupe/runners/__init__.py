from roster_dedupe.runners.local import LocalResolutionSession, apply_resolution

__all__ = ["LocalResolutionSession", "apply_resolution"]
