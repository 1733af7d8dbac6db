"""
The ldcontext module converts evaluation contexts to and from their JSON representations.
"""

from ldcontext.version import VERSION

from .codec import *
from .config import *
from .context import *
from .errors import *

__version__ = VERSION
