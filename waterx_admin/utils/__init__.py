"""
Utilities package for WaterX Admin
"""

from .file_reader import ReadResult, read_text, FileReadWorker
from .workers import TaskWorker

__all__ = ['ReadResult', 'read_text', 'FileReadWorker', 'TaskWorker']
