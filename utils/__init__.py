"""
Utility modules
"""

from .input_parser import InputParser, MalformedRecordError
from .visualization import Visualizer

__all__ = ['InputParser', 'MalformedRecordError', 'Visualizer']
