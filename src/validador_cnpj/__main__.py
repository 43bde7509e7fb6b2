"""
CLI entry point: python -m validador_cnpj <cnpj> [<cnpj> ...]
"""

import sys

from validador_cnpj.cli import main

if __name__ == "__main__":
    sys.exit(main())
