"""
scisim: interactive science simulations rendered with matplotlib.

Every scenario follows the same lifecycle:
- A declared set of bounded parameters (sliders)
- A fixed-timestep update that integrates the physical state
- A draw pass that paints the state onto an Axes
- A list of display rows recomputed every frame

Subpackages:
- core: parameters, simulation contract, fields, driver, animation, pooling
- motion: free fall, projectile, pendulum, collisions, inclined plane
- waves: single wave, interference, reflection, diffraction
- chemistry: electron configurations and a small molecule builder
- analysis: energy traces and measured-vs-theory comparisons
- viz: drawing helpers, field plots and the interactive app
"""

__version__ = "0.1.0"
