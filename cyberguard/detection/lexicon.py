"""
Word, keyword and phrase tables used by the lexical scorer and the
word-level analyzer.

Tables are written in natural form; consumers normalize them once when they
are constructed. All lists contain offensive language purely for detection.
"""

import re

# ---------------------------------------------------------------------------
# Word categories (word-level analysis)
# ---------------------------------------------------------------------------

CRITICAL_THREAT_WORDS = frozenset([
    "kill", "die", "suicide", "murder", "dead", "death", "stab", "shoot", "slash",
    "assassin", "assassinate", "bomb", "execute", "execution", "homicide", "lynch",
    "slaughter", "sniper", "terrorist", "weapon", "gun", "knife", "pistol", "nuke",
])

VIOLENCE_WORDS = frozenset([
    "beat", "hurt", "harm", "attack", "punch", "kick", "destroy", "violence", "threat",
    "abuse", "assault", "buried", "burn", "crime", "criminal", "explosion", "fight",
    "fire", "firing", "hijack", "hostage", "rape", "torture", "bombing",
])

WORTH_ATTACK_WORDS = frozenset([
    "waste", "burden", "useless", "worthless", "mistake", "disappear", "trash", "unwanted",
    "loser", "failure", "nobody", "pathetic", "incompetent", "retard", "retarded", "stupid",
    "dumb", "idiot", "moron", "ugly", "fugly", "fat", "fatass", "gross",
])

SHAMING_WORDS = frozenset([
    "embarrassment", "embarrassing", "disgrace", "disgusting", "shameful", "disappointment",
    "revolting", "repulsive", "annoying", "irritating", "pest", "nuisance", "ugly",
    "gross", "fat", "fatso", "skanky", "slutty",
])

INSULT_WORDS = frozenset([
    "stupid", "dumb", "idiot", "loser", "pathetic", "failure", "incompetent", "nobody",
    "bastard", "bitch", "asshole", "dick", "dickhead", "prick", "cunt", "twat",
    "jerk", "douche", "scumbag", "slut", "whore", "skank", "trash",
])

EXISTENCE_WORDS = frozenset([
    "existence", "problem", "regret", "shouldnt", "empty", "meaningless", "pointless",
    "broken", "mistake", "unwanted", "burden", "waste",
])

MOCKERY_WORDS = frozenset([
    "laughs", "mock", "joke", "ridicule", "humiliate", "embarrass",
])

# Only toxic when aimed at a person ("bad idea" vs "you are bad")
MILD_CONTEXTUAL_WORDS = frozenset([
    "bad", "wrong", "weird", "strange", "crazy", "silly", "dumb",
    "lame", "sucks", "boring", "annoying", "awful", "terrible", "horrible",
    "noob", "newb", "scrub", "dum", "git", "gud", "ez", "rekt",
])

# ---------------------------------------------------------------------------
# Lexical scoring tables
# ---------------------------------------------------------------------------

_THREAT_KEYWORDS = [
    "kill", "die", "suicide", "beat", "hurt", "harm", "attack",
    "stab", "shoot", "slash", "punch", "kick", "destroy",
    "murder", "dead", "death", "violence", "threat",
]

_WORTH_KEYWORDS = [
    "waste", "burden", "useless", "worthless", "pathetic",
    "mistake", "disappear", "stupid", "dumb", "incompetent",
    "embarrassment", "embarrassing", "disgrace", "disgusting", "shameful",
    "idiot", "loser", "nobody", "failure", "disappointment",
    "yourself", "delete", "leave", "trash", "shut",
    "annoying", "irritating", "pest", "nuisance", "existence",
    "regret", "shouldnt", "problem", "unwanted", "revolting", "repulsive",
    "empty", "meaningless", "pointless", "broken", "laughs", "mock",
]

_PROFANITY_KEYWORDS = [
    "arse", "arsehole", "ass", "asshole", "asswipe", "bastard", "bitch", "bitches",
    "bitching", "bloody", "bollocks", "bullshit", "butthole", "cock", "crap", "cunt",
    "damn", "dick", "dickhead", "douche", "fck", "fuck", "fucker", "fucking", "fuk",
    "goddamn", "jerk", "knobend", "mofo", "motherfucker", "piss", "pissed", "prick",
    "pussy", "screw", "shit", "slut", "suck", "tosser", "turd", "twat", "wank",
    "wanker", "whore", "wtf",
]

# Slurs only; neutral identity terms are not listed
_SLUR_KEYWORDS = [
    "beaner", "chink", "coon", "darkie", "dago", "dyke", "fag", "faggot", "gook",
    "kike", "kraut", "nigga", "niggah", "nigger", "paki", "polack", "raghead",
    "sandnigger", "spic", "spick", "towelhead", "tranny", "wetback", "wop",
    "zipperhead",
]

_SEXUAL_KEYWORDS = [
    "assfuck", "blowjob", "cocksucker", "cumshot", "deepthroat", "dildo", "gangbang",
    "handjob", "hooker", "horny", "jizz", "milf", "molestation", "nympho", "porn",
    "porno", "prostitute", "rape", "raper", "skank", "skanky", "slutty", "sodomy",
    "stripper", "xxx",
]

_VIOLENCE_KEYWORDS = [
    "abuse", "assault", "assassin", "bomb", "bombing", "buried", "burn", "bury",
    "crime", "criminal", "executed", "execution", "explode", "explosion", "fight",
    "gun", "hijack", "homicide", "hostage", "killed", "killer", "killing", "knife",
    "lynch", "murderer", "nuke", "pistol", "shooting", "slaughter", "sniper",
    "terrorist", "torture", "weapon",
]

_BODY_SHAMING_KEYWORDS = [
    "fat", "fatass", "fatso", "fugly", "gross", "retard", "retarded", "ugly",
]


def _unique(*groups):
    seen = {}
    for group in groups:
        for word in group:
            seen.setdefault(word, None)
    return tuple(seen)


TOXIC_KEYWORDS = _unique(
    _THREAT_KEYWORDS,
    _WORTH_KEYWORDS,
    _PROFANITY_KEYWORDS,
    _SLUR_KEYWORDS,
    _SEXUAL_KEYWORDS,
    _VIOLENCE_KEYWORDS,
    _BODY_SHAMING_KEYWORDS,
)

TOXIC_PHRASES = (
    # Threats
    "i will kill you", "i'll kill you", "gonna kill you", "going to kill you",
    "i will beat you", "i'll beat you", "gonna beat you",
    "i will hurt you", "i'll hurt you", "gonna hurt you",
    "i will stab you", "i'll stab you", "gonna stab you",
    "i will shoot you", "i'll shoot you",
    "i will attack you", "i'll attack you",
    "go suicide", "commit suicide", "do suicide", "kill yourself",
    "go kill yourself", "you should die", "just die", "go die",
    "end your life", "kill urself", "kys",
    "watch your back", "you're dead", "youre dead",
    "nobody would miss you", "no one would care",
    "better off dead", "world better without you",
    # Existence and worth
    "waste of space", "better off without you", "nobody wants you here",
    "completely useless", "you serve no purpose", "you are a burden",
    "your existence is burden", "your existence is waste", "your existence is mistake",
    "existence is burden", "existence is waste", "existence is problem",
    "you are burden", "being you is burden",
    "everyone better without you", "shouldnt exist",
    "your presence is burden", "presence is problem",
    # Intelligence and competence
    "empty as your brain", "your brain is empty", "your future is empty",
    "everyone voted that", "shouldnt be part", "laughs at you", "mock you",
    "makes everything worse", "your presence makes", "presence ruins",
    # Shaming
    "you are embarrassing", "you are pathetic", "you are disgusting",
    "you are an embarrassment", "you are a disgrace", "you are a disappointment",
    "you are a failure", "such a loser", "what a loser", "so pathetic",
    "ashamed of you", "you should be ashamed",
    # Social rejection
    "do everyone a favor and just disappear", "youre a mistake",
    "you are a mistake", "wish you were never born", "nobody cares about you",
    "so stupid it hurts", "youre so stupid", "never be good enough",
    "youre an embarrassment",
    "go away nobody likes you", "nobody likes you",
    "you dont belong here", "shut up loser", "take a hint",
    "id be so ashamed if i were you", "ruin the mood",
    "you think you matter", "keep crying about it",
    "why are you even talking", "who asked you", "nobody asked",
)

HIGH_SEVERITY_PHRASES = (
    "kill yourself", "go kill yourself", "kys",
    "you should die", "better off dead", "end your life",
    "commit suicide", "go suicide", "do suicide", "just die",
    "i will kill you", "i'll kill you", "gonna kill you",
    "i will beat you", "i'll beat you", "gonna beat you",
    "i will hurt you", "i'll hurt you", "gonna hurt you",
    "i will stab you", "i'll stab you", "gonna stab you",
    "i will shoot you", "i'll shoot you", "gonna shoot you",
    "i will attack you", "i'll attack you",
    "go die", "watch your back", "you're dead", "you'll regret this",
    "nobody would miss you", "no one would care if you died",
    "end it all", "kill urself", "hurt yourself",
)

# ---------------------------------------------------------------------------
# Context detection
# ---------------------------------------------------------------------------

# Evaluated on the original (lowercased) text
PERSONAL_PRONOUN_PATTERN = re.compile(r"\b(you|your|you're|youre|ur|u are)\b", re.IGNORECASE)
TECHNICAL_CONTEXT_PATTERN = re.compile(
    r"\b(process|program|app|software|system|battery|device|server|code)\b",
    re.IGNORECASE,
)
OBJECT_CONTEXT_PATTERN = re.compile(
    r"\b(this|that|it|these|those|movie|weather|food|idea)\b",
    re.IGNORECASE,
)

# Evaluated on normalized text by the lexical scorer
NON_PERSONAL_CONTEXT_PATTERN = re.compile(
    r"\b(project|system|team|work|task|code|software|application|feature|issue|bug"
    r"|process|program|app|battery|device|server)\b"
)
NORMALIZED_PRONOUN_PATTERN = re.compile(r"\b(you|your|ur)\b")
