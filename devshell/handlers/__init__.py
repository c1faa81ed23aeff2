"""One module per shell verb; each exposes ``run(session, terminal, args)``."""
