from .score_priority import score_priority
from .distance_to_port import generate_distance_to_port
from .zonal_summary import summarise_zones
from .reclassify_layer import reclassify_layer, parse_rule

__all__ = [
    "score_priority",
    "generate_distance_to_port",
    "summarise_zones",
    "reclassify_layer",
    "parse_rule",
]
