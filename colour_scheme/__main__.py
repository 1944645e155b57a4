# colour_scheme/__main__.py
from .cli import main

main()
