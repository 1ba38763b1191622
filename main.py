from reaction_caption.cli import run


if __name__ == "__main__":
    run()
