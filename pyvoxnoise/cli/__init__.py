"""
Command Line Interface for PyVoxNoise

Command line utilities to generate and inspect noise volumes without writing
Python scripts.

Available Commands:
- generate: Generate noise volumes from text descriptions (pvn-generate)
- preview: Render a grid of z-slices of a .dat volume (pvn-preview)

Author: B.G.
"""

_CLI_SUBMODULES = {
    "generate": (".generate_commands", "generate"),
    "preview": (".preview_commands", "preview"),
}

__all__ = list(_CLI_SUBMODULES.keys())


def __getattr__(name):
    info = _CLI_SUBMODULES.get(name)
    if info is None:
        raise AttributeError(name)
    pkg, attr = info
    import importlib
    mod = importlib.import_module(pkg, __package__)
    obj = getattr(mod, attr)
    globals()[name] = obj
    return obj
