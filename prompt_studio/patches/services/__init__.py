from .orchestrator import DEFAULT_MAX_PATCH_ATTEMPTS, PatchOrchestrator

__all__ = ["DEFAULT_MAX_PATCH_ATTEMPTS", "PatchOrchestrator"]
