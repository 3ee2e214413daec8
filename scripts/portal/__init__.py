"""Dashboard portal Streamlit app."""
