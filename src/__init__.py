"""
stubsync - Réconciliation des épisodes manquants et fichiers stubs.

Ce package compare le catalogue TVDB d'une série à sa bibliothèque locale,
crée ou supprime les saisons/épisodes virtuels et maintient des fichiers
stubs lisibles pour les épisodes absents.

Architecture : Hexagonale (Ports et Adaptateurs)
- core/ : Couche domaine (entités, ports, objets valeur)
- services/ : Couche application (réconciliation, cycle de vie des stubs)
- adapters/ : Couche infrastructure (CLI, client TVDB, hôte)
- infrastructure/ : Registres persistants (fichiers texte)
"""
