"""
Pytest configuration file for tests.

Puts the project root on sys.path so the tests run from a plain checkout,
without installing the package first.
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
