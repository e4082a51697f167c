"""
Content Planner

An SEO content-planning service that:
1. Researches keywords (synthesized volume, difficulty, CPC, trends)
2. Analyzes competing pages for a target keyword
3. Generates content outlines from per-content-type templates
4. Produces on-page optimization suggestions for an outline
"""

__version__ = "0.1.0"
