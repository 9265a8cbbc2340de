"""
WaterX Admin - Modular Package
Administrative front-end for the WaterX backend
"""

__version__ = "1.0.0"

# Main modules can be imported from here
from . import config
from . import validators
from . import models

__all__ = ['config', 'validators', 'models']
