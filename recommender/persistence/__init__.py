"""Database persistence layer."""
from .loader import CandidateLoader, CandidateSet
from .models import Base, Job, Post, Profile

__all__ = [
    "Base",
    "Profile",
    "Job",
    "Post",
    "CandidateLoader",
    "CandidateSet",
]
