pytest_plugins = ["brewtest.pytest_plugin", "pytester"]
