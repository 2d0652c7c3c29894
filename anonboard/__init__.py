"""
AnonBoard - Anonymous Message Board Backend

Boards of threads and replies held in memory, with password-gated
deletion and reporting of abusive posts.
"""

__version__ = "0.1.0"
__author__ = "AnonBoard Project"
