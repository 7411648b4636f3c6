"""
Container d'injection de dependances via dependency-injector.

Fournit une gestion centralisee des dependances pour la CLI : configuration,
registres persistants, client TVDB, cycle de vie des stubs et reconciliation.
"""

from dependency_injector import containers, providers

from .adapters.api.cache import APICache
from .adapters.api.tvdb_client import TVDBClient
from .adapters.file_system import FileSystemAdapter
from .adapters.host.event_bus import EventBus
from .adapters.host.localization import StaticLocalization
from .adapters.host.memory_library import InMemoryLibrary
from .adapters.parsing.guessit_parser import GuessitFilenameParser
from .config import Settings
from .core.ports.library import LibraryOptions
from .infrastructure.persistence.repositories import (
    FilePlaceholderRepository,
    FileRuntimeRepository,
)
from .services.reconciler import MissingEpisodeReconciler, ReconciliationOptions
from .services.stub_lifecycle import StubLifecycleManager
from .services.stub_resolver import StubResolver


class Container(containers.DeclarativeContainer):
    """Container DI de l'application.

    Utilisation :
        container = Container()
        runtimes = container.runtime_repository()
        library = container.library()
        reconciler = container.reconciler(
            library=library,
            stubs=container.stub_lifecycle_manager(library=library),
        )
    """

    # Configuration - singleton charge une seule fois
    config = providers.Singleton(Settings)

    # Adapters - implementations concretes des ports
    file_system = providers.Singleton(FileSystemAdapter)
    filename_parser = providers.Singleton(GuessitFilenameParser)
    event_bus = providers.Singleton(EventBus)

    localization = providers.Singleton(
        StaticLocalization.from_template,
        season_name_template=config.provided.season_name_template,
    )

    library_options = providers.Singleton(
        LibraryOptions,
        season_zero_display_name=config.provided.season_zero_display_name,
    )

    # Bibliotheque - Factory : une par serie scannee
    library = providers.Factory(InMemoryLibrary, options=library_options)

    # Registres - Singletons : un seul verrou par fichier dans le processus
    runtime_repository = providers.Singleton(
        FileRuntimeRepository,
        store_path=config.provided.runtime_store_path,
    )
    placeholder_repository = providers.Singleton(
        FilePlaceholderRepository,
        store_path=config.provided.placeholder_store_path,
    )

    stub_resolver = providers.Singleton(
        StubResolver,
        stubs_dir=config.provided.stubs_dir,
        file_system=file_system,
    )

    # Cache API - Singleton
    api_cache = providers.Singleton(
        APICache,
        cache_dir=config.provided.cache_dir,
    )

    # Client TVDB - sans cle API, chaque requete leve CatalogUnavailableError
    tvdb_client = providers.Singleton(
        TVDBClient,
        api_key=config.provided.tvdb_api_key,
        cache=api_cache,
        default_language=config.provided.metadata_language,
    )

    reconciliation_options = providers.Singleton(
        ReconciliationOptions.from_settings,
        settings=config,
    )

    # Services - Factory car lies a une bibliotheque
    stub_lifecycle_manager = providers.Factory(
        StubLifecycleManager,
        file_system=file_system,
        resolver=stub_resolver,
        runtimes=runtime_repository,
        placeholders=placeholder_repository,
        library=library,
        localization=localization,
    )

    reconciler = providers.Factory(
        MissingEpisodeReconciler,
        catalog=tvdb_client,
        library=library,
        localization=localization,
        stubs=stub_lifecycle_manager,
        runtimes=runtime_repository,
        options=reconciliation_options,
    )
