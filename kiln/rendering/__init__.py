"""Tree rendering and file I/O."""
