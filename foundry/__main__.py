from foundry.cli.main_commands import app

if __name__ == "__main__":
    app()
