"""
Simple launcher for Strukly.

    python run.py          # Streamlit UI
    python run.py api      # FastAPI backend (uvicorn)
"""

import os
import sys
import subprocess


def run_api():
    import uvicorn

    print(" Starting Strukly API...")
    print(" Will listen on: http://localhost:8000")
    uvicorn.run("strukly.api.app:app", host="0.0.0.0", port=8000)


def run_ui():
    print(" Starting Streamlit UI...")
    print(" Will open at: http://localhost:8501")
    streamlit_script = os.path.join(os.path.dirname(__file__), "strukly", "ui", "streamlit_app.py")
    subprocess.run([sys.executable, "-m", "streamlit", "run", streamlit_script], check=True)


def main():
    print(" STRUKLY")
    print("=" * 60)
    print(" Press Ctrl+C to stop")
    print("=" * 60)
    print()

    target = sys.argv[1] if len(sys.argv) > 1 else "ui"
    try:
        if target == "api":
            run_api()
        elif target == "ui":
            run_ui()
        else:
            print(f" Unknown target '{target}'. Use 'ui' or 'api'.")
            sys.exit(2)
    except KeyboardInterrupt:
        print("\n\n Shutting down gracefully...")
    except subprocess.CalledProcessError as e:
        print(f"\n Error: {e}")
        sys.exit(e.returncode)


if __name__ == "__main__":
    main()
