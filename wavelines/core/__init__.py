"""Core animation primitives for wavelines.

Modules:
- color: rgb()/rgba() parsing and gradient-stop shifts
- field: wave table with derived layout constants
- waves: four-harmonic curve sampler
- renderer: draws a frame of the wave field
- driver: frame-scheduling state machine
- host: virtual refresh/timeout loop
"""
