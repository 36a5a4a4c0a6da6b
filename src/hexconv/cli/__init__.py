"""
hexconv Command-Line Interface
==============================

This package provides the hexconv command-line tool:

- **bin2hex**: Convert a binary image to Intel HEX
- **hex2bin**: Convert Intel HEX to a binary image
- **dump**: Print the records of a HEX file
- **validate**: Check every record of a HEX file

The tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["hexconv"]
