"""
Allow running the package directly: python -m fractalviewer
"""
import sys

from .app import main

sys.exit(main())
