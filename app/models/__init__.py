from .claims import Category, ClaimInput, ClaimOutput, ClassificationResult, ExtractedFields

__all__ = ["Category", "ClaimInput", "ClaimOutput", "ClassificationResult", "ExtractedFields"]
