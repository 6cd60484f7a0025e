"""Точка входа в настольное приложение."""
import logging

from image_morse.app import ImageMorseApp
from image_morse.cli import LOG_FORMAT


def main() -> None:
    """Создаёт и запускает главное окно приложения."""
    logging.basicConfig(level=logging.INFO, format=LOG_FORMAT, datefmt="%H:%M:%S")
    app = ImageMorseApp()
    app.mainloop()


if __name__ == "__main__":
    main()
