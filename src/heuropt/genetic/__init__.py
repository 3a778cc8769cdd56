"""
Genetic metaheuristics for heuropt.

Currently there's an implementation of BRKGA.
"""

from .decoder import Decoder
from .population import Member, MemberBuilder, Population, GenerationHistory, random_member_builder
from .brkga import Brkga, BrkgaParams

__all__ = [
    "Decoder",
    "Member",
    "MemberBuilder",
    "random_member_builder",
    "Population",
    "GenerationHistory",
    "Brkga",
    "BrkgaParams",
]
