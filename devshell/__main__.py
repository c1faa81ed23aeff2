# python
"""
devshell.__main__
Entry point for python -m devshell
"""
from .server import main

if __name__ == "__main__":
    main()
