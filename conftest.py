import os, sys

def _early_path():
    ROOT = os.path.abspath(os.path.dirname(__file__))
    if ROOT not in sys.path:
        sys.path.insert(0, ROOT)
_early_path()

# Тестовый режим: без фонового reaper и с предсказуемыми настройками
os.environ.setdefault('APP_ENV', 'test')
os.environ.setdefault('REAPER_ENABLED', 'false')

def pytest_configure():  # noqa: D401
    # Re-assert path very early in pytest lifecycle
    _early_path()
