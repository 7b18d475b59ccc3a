"""graphzlive — visual-learning graph catalog with public and admin surfaces."""

__version__ = "0.1.0"
