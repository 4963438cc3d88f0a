"""
Validators package
"""

from .review_validators import ReviewValidatorMixin

__all__ = ["ReviewValidatorMixin"]
