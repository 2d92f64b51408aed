"""
FPL Fixture Index Package

Deterministic, explainable fixture difficulty and transfer ranking for Fantasy
Premier League snapshots. League standings are rebuilt from results, team
strength is taken from the form of each side's leading players, fixtures are
rated into difficulty tiers (with blank gameweeks penalised), and player form
is blended with fixture ease into a single Transfer Index.
"""

__version__ = "1.0.0"
