"""Job recommendations: rank job postings against user profiles."""
__version__ = "0.1.0"
