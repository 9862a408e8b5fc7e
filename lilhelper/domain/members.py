# Membres du clan: pseudo Idle Clans → nom affiché / ID Discord.

MEMBER_TO_DISCORD = {
    "ImaKlutz":  "ImaKlutz",
    "guildan":   "Guildan",
    "Charlster": "Gagnon54",
    "moraxam":   "Morax",
    "yothos":    "yothos",
    "Choufleur": "Steph",
    "g4m3f4c3":  "g4m3f4c3",
    "Oliiviier": "oli",
}

MEMBER_TO_DISCORD_ID = {
    "ImaKlutz":  "270655486318215168",
    "guildan":   "199632692231274496",
    "Charlster": "409718701236158465",
    "moraxam":   "344994648059674624",
    "yothos":    "448261978469695489",
    "Choufleur": "229776173146570755",
    "g4m3f4c3":  "298522549661466625",
    "Oliiviier": "350298028902711308",
}

def build_id_to_display_name(names: dict[str, str] | None = None,
                             ids: dict[str, str] | None = None) -> dict[str, str]:
    """ID Discord → nom affiché. Reconstruit à chaque appel (pas de cache)."""
    names = MEMBER_TO_DISCORD if names is None else names
    ids = MEMBER_TO_DISCORD_ID if ids is None else ids
    return {discord_id: names[game] for game, discord_id in ids.items() if game in names}

def discord_id_for(game_name: str) -> str | None:
    """Recherche insensible à la casse (les logs ne respectent pas toujours la casse)."""
    low = game_name.strip().lower()
    for game, discord_id in MEMBER_TO_DISCORD_ID.items():
        if game.lower() == low:
            return discord_id
    return None
