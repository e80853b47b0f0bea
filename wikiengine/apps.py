from django.apps import AppConfig


class WikiEngineConfig(AppConfig):
    name = 'wikiengine'
    verbose_name = 'Wiki engine'
