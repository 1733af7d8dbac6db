from .attribute_ref import *
