"""
Editor demo: orbit camera around the origin of the demo room.

Click to capture the mouse, move it to orbit, Escape to release.

    python examples/editor.py [--config my.json]
"""

from crafthouse.app import main

if __name__ == "__main__":
    main(camera="editor")
