"""Product analysis agent"""

from .product_analyzer import analyze_product

__all__ = ['analyze_product']
