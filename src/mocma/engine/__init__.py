"""
Engine layer: the MO-CMA-ES algorithm and its configuration.
"""
