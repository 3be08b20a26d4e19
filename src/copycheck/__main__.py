from copycheck.cli.main import app  # pragma: no cover

if __name__ == "__main__":  # pragma: no cover
    app()
