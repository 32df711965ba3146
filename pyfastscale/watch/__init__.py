"""
Folder workflows for PyFastScale.

- FolderMonitor: poll-sleep-repeat loop over an input folder
- process_folder: single pass with a JSON-friendly summary
"""

from .monitor import FileResult, FolderMonitor, process_folder

__all__ = ["FileResult", "FolderMonitor", "process_folder"]
