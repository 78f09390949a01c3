"""
ratecalc/api package marker.
"""
