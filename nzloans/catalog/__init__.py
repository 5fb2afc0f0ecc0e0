from .api import LoanCatalog

__all__ = ["LoanCatalog"]
