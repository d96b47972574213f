"""Material models for shading.

Components:
    phong: Material properties and the Phong lighting function
    pattern: Stripe and gradient patterns that replace a flat color
"""

from .pattern import Pattern, PatternKind, gradient_pattern, stripe_pattern
from .phong import Material, lighting

__all__ = [
    "Material",
    "lighting",
    "Pattern",
    "PatternKind",
    "stripe_pattern",
    "gradient_pattern",
]
