"""
dafile.cli — command-line interface.

    dafile submit --file movie.mp4
    dafile read --locator 42/000008e5f679bf7116cb/9f2c… --file movie.mp4
    dafile inspect --locator 42/000008e5f679bf7116cb/9f2c…

Entry point: `dafile.cli.main:main`.
"""

from .main import app

__all__ = ["app"]
