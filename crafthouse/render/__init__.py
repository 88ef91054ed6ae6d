"""Scene preview rendering (moderngl). Mesh data in `meshes` needs no GL context."""
