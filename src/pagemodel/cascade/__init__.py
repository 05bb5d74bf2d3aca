from pagemodel.cascade.matcher import Ancestry, matches, matches_compound, specificity
from pagemodel.cascade.resolver import (
    ResolvedStyle,
    cascade,
    resolve,
    resolve_node,
    resolve_states,
)

__all__ = [
    "Ancestry",
    "matches",
    "matches_compound",
    "specificity",
    "ResolvedStyle",
    "cascade",
    "resolve",
    "resolve_node",
    "resolve_states",
]
