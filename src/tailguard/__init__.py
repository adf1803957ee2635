"""tailguard — lint Tailwind v4 / Next.js source against team styling conventions."""

__version__ = "0.1.0"
