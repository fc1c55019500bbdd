"""vite2next package.

Migrates a Vite React project to the Next.js App Router: synthesizes the root
layout and entry page, then rewrites configuration, scripts and assets.
"""

__all__ = ["__version__"]

__version__ = "0.1.0"
