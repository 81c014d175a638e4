pytest_plugins = ["pathglob._pytest_plugin"]
