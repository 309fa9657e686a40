"""
Streamlit entry point:
    streamlit run frontend/streamlit_app.py

Expects the backend to be running (python app/app.py).
"""

import sys
from pathlib import Path

# Ensure project root is on sys.path when launched by `streamlit run`
sys.path.insert(0, str(Path(__file__).parent.parent))

from frontend.ui import main

main()
