"""
Couche domaine (core).

Contient les entités métier, ports (interfaces abstraites), et objets valeur.
Cette couche n'a AUCUNE dépendance vers l'infrastructure (adapters, frameworks).

Sous-packages :
- entities/ : Entités métier (Series, Season, Episode, entrées des registres)
- ports/ : Interfaces abstraites définissant les contrats pour les adaptateurs
- value_objects/ : Objets valeur immutables (ParsedFilename)
- exceptions.py : Exceptions du domaine
"""
