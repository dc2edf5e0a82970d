"""
Web module for TicTacToe.
Static responder for the portfolio page.
"""

from .app import app, create_app
