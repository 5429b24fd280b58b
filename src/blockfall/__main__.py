from blockfall.visualization.human_play import run


if __name__ == "__main__":  # pragma: no cover
    run()
