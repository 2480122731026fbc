from appwire.integrations.pytest_plugin.plugin import appwire_app, appwire_options

__all__ = ["appwire_app", "appwire_options"]
