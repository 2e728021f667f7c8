"""
Metrics subsystem for linkograph.

Derives threshold-dependent structure (active links, link density
index, link entropy) from a score matrix.
"""

from linkograph.metrics.entropy import LinkEntropy, LinkEntropyAnalyzer
from linkograph.metrics.link_metrics import LinkMetrics, LinkographStats

__all__ = [
    "LinkEntropy",
    "LinkEntropyAnalyzer",
    "LinkMetrics",
    "LinkographStats",
]
