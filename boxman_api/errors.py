# boxman_api/errors.py


class BoxmanError(Exception):
    """Uygulamanın kurtarılabilir hatalarının tabanı."""


class ServiceListError(BoxmanError):
    """systemctl çalıştırılamadı, sıfır dışı döndü ya da zaman aşımına uğradı."""


class HomeDirectoryError(BoxmanError):
    """'~/' ile başlayan yol için ev dizini bulunamadı."""
