"""Template instantiation engine: token scanning, substitution, tree mirroring,
template source resolution, and the package scaffolder."""
