def run(session, terminal, args):
    terminal.clear()
