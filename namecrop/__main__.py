"""``python -m namecrop`` 진입점."""

from namecrop.cli import main

main()
