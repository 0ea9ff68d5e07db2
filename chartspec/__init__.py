"""Axis and scale compiler for Vega visualization-grammar specifications."""
