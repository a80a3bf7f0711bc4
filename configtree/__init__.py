"""configtree

In-memory configuration store with dotted hierarchical keys.
"""

__version__ = "0.1.0"

# Configuration
from configtree.config import ConfigContainer, Container
