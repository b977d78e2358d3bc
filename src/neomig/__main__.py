"""Module entrypoint to run `python -m neomig`."""

from neomig.entrypoints.cli.main import main

if __name__ == "__main__":
    main()
