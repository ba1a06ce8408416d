"""CPU Monte Carlo path tracer: scene objects, BVH, materials and a multi-process renderer."""
__version__ = "0.1.0"
