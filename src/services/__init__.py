"""
Application services layer (use cases).

- StubResolver / find_closest_stub: picks the stub file matching a runtime
- StubLifecycleManager: creates, upgrades and cleans stub files of a series
- MissingEpisodeReconciler: reconciles the local tree with the TVDB catalog

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
