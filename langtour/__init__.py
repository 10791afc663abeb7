"""
Language Tour

Companion package for the language-tour notebook: Unicode identifiers,
Monte Carlo estimation, plotting, sequence analysis, Entrez lookups and
a folium/Leaflet interop demo.
"""

__version__ = "0.1.0"
