"""
Shooter demo: free-fly camera in the demo room.

Click to capture the mouse, WASD/Space/Shift to move, Escape to release.

    python examples/shooter.py [--config my.json]
"""

from crafthouse.app import main

if __name__ == "__main__":
    main(camera="shooter")
