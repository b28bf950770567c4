"""Taichi-based sphere ray caster with hard shadows.

This package casts one primary ray per pixel into a scene of colored spheres,
finds the hit closest to the eye, tests a shadow ray toward a single point
light and shades each pixel flat or black.

Subpackages:
    core: Ray utilities, render configuration and the render kernel
    camera: Primary ray generation
    geometry: Sphere primitive and ray-sphere intersection
    scene: Scene description, closest-hit and shadow queries
    preview: Quantization, PNG export and display windows
"""

__version__ = "0.1.0"
