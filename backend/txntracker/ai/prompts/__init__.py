from txntracker.ai.prompts.extraction import EXTRACTION_SYSTEM, EXTRACTION_USER

__all__ = ["EXTRACTION_SYSTEM", "EXTRACTION_USER"]
