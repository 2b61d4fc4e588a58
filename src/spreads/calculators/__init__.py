"""
Derived-metric calculators.

Pure functions from validated upstream payloads to domain views. The only
non-determinism is the dividend jitter, which draws from an injected RNG.
"""
