"""
Couche infrastructure de stubsync.

Ce module contient les implementations concretes des interfaces definies
dans la couche domaine (ports). Il gere les preoccupations techniques :

- persistence/ : Registres fichiers (durees par serie, placeholders)

Architecture hexagonale : les adapters ici implementent les ports du domaine,
permettant de changer le stockage des registres sans modifier la logique metier.
"""
