"""Streamlit entry point: `streamlit run app.py` runs the ECG Heart Risk UI in app/app.py."""
import os
import runpy
import sys

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "src"))
runpy.run_path(os.path.join(os.path.dirname(__file__), "app", "app.py"), run_name="__main__")
