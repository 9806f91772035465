import logging

from lanshare.config import Settings
from lanshare.ui.gui import GUI

def main():
    settings = Settings()
    logging.basicConfig(level=settings.log_level_value, format="%(asctime)s - %(levelname)s - %(lineno)d - %(message)s")

    gui = GUI(settings)
    gui.window_setup()

if __name__ == "__main__":
    main()
