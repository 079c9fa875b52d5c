"""
Serverless entry point for the SAP MM Ticket Solver API
"""
import sys
import os

# Add parent directory to path
parent_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if parent_dir not in sys.path:
    sys.path.insert(0, parent_dir)

os.environ.setdefault("ENVIRONMENT", "production")

from mangum import Mangum
from src.main import app

# Lifespan stays on: the knowledge base is loaded at cold start
handler = Mangum(app, lifespan="auto")
