"""
Semantic pattern catalog for subtle and explicit cyberbullying.

Each rule is ``(regex, meaning, severity, category)``. Rules are matched
against lowercased, de-obfuscated text that still carries its punctuation, so
apostrophes ("you're", "i'll") and question marks are significant. Every rule
is evaluated on every text; overlapping matches are intended and add up in the
final score.

All regex lists contain offensive language purely for detection purposes.
"""

import re
from typing import List, Tuple

from .types import SemanticPattern

# Synthetic match emitted when the raw text contains a run of 4+ capitals
CAPS_EMPHASIS = "CAPS_EMPHASIS"
CAPS_EMPHASIS_MEANING = "Aggressive caps emphasis"
CAPS_EMPHASIS_SEVERITY = 0.20

PATTERN_RULES: List[Tuple[str, str, float, str]] = [
    # -------------------------------------------------------------------
    # Critical threats: physical violence and self-harm
    # -------------------------------------------------------------------
    (r"\b(i will|i'll|ima|imma|gonna|going to|i'm going to) (kill|murder|end|destroy) (you|u|ur life)\b",
     "CRITICAL: Death threat - direct threat to kill", 1.0, "death_threat"),
    (r"\b(i will|i'll|ima|imma|gonna|going to) (beat|hurt|harm|attack|hit|punch|kick|stab|shoot|slash) (you|u)\b",
     "CRITICAL: Physical violence threat", 0.98, "violence_threat"),
    (r"\b(go|going to|gonna|commit|do|just) (suicide|kill yourself|kys|end it|die)\b",
     "CRITICAL: Self-harm/suicide encouragement", 1.0, "self_harm_encouragement"),
    (r"\b(you|u|you're|ur|youre) (going to|gonna|will|should) (suicide|die|kill yourself|kys|end your life|not exist)\b",
     "CRITICAL: Suicide/death threat or encouragement", 1.0, "death_wish"),
    (r"\b(you|u) (don't|dont|do not|doesn't|doesnt) deserve (to )?(live|exist|be here|be alive|breathe)\b",
     "CRITICAL: Denying right to exist", 0.98, "existence_denial"),
    (r"\b(go|just) die\b",
     "CRITICAL: Death wish command", 0.95, "death_wish"),
    (r"\b(drink|swallow|consume|eat) (bleach|poison|acid|detergent)\b",
     "CRITICAL: Suicide encouragement - toxic substance", 1.0, "self_harm_encouragement"),
    (r"\bgo (play|run|walk|jump) in (traffic|front of)\b",
     "CRITICAL: Suicide encouragement - play in traffic", 0.98, "self_harm_encouragement"),
    (r"\b(i'm|i am|we're|we are) (gonna|going to|will) (get|come for|find|hunt) (you|u)\b",
     "CRITICAL: Stalking/hunting threat", 0.95, "stalking_threat"),
    (r"\b(watch your back|you're dead|you'll regret|i'll make you|you better watch out)\b",
     "CRITICAL: Intimidation threat", 0.92, "intimidation"),
    (r"\b(i'll|i will) (stab|shoot|cut|slash|choke|strangle|suffocate) (you|u)\b",
     "CRITICAL: Weapon-based violence threat", 1.0, "weapon_threat"),
    (r"\b(kill|hurt|beat|attack|harm) (yourself|urself|you)\b",
     "CRITICAL: Violence/self-harm command", 0.95, "harm_command"),
    (r"\b(i|we) (hope|wish) (you|u) (die|get hurt|suffer|rot|burn)\b",
     "CRITICAL: Death/harm wish", 0.93, "death_wish"),
    (r"\b(nobody|no one) would (miss|care|notice) if (you|u) (died|were gone|disappeared)\b",
     "CRITICAL: Suicide encouragement through isolation", 0.98, "self_harm_encouragement"),

    # Conditional (if/then) threats
    (r"\bif (i see|i find|i catch|i get|you) .{0,30}(i will|i'll|ima|gonna) (kill|beat|hurt|attack|destroy|end) (you|u)\b",
     "CRITICAL: Conditional violence threat - if/then pattern", 0.96, "conditional_threat"),
    (r"\bif (you|u) (don't|dont|do not) .{0,30}(i will|i'll|gonna) (kill|beat|hurt|dox|expose|leak|destroy) (you|u)\b",
     "CRITICAL: Conditional extortion threat", 0.98, "extortion_threat"),

    # -------------------------------------------------------------------
    # Doxing and privacy threats
    # -------------------------------------------------------------------
    (r"\b(i|we) (know|found|have) (where you live|your address|which school|where you go|your phone|your info|your location)\b",
     "CRITICAL: Doxing threat - claiming to have private information", 0.95, "doxing_threat"),
    (r"\b(i will|i'll|gonna|going to) (dox|expose|leak|share|post|reveal) (you|your info|your address|your photos|your data)\b",
     "CRITICAL: Doxing threat - intent to expose private info", 0.97, "doxing_threat"),
    (r"\b(send|post|share) (nudes|pics|photos) or (i will|i'll|else)\b",
     "CRITICAL: Sexual extortion threat", 1.0, "sexual_extortion"),

    # Sexual harassment and violence
    (r"\b(i hope|i wish|you should|you gonna) (get |be )?(raped|sexually assaulted|violated)\b",
     "CRITICAL: Sexual violence wish/threat", 1.0, "sexual_violence"),
    (r"\b(slut|whore|prostitute|hoe|thot)\b",
     "Sexual harassment - gendered slur", 0.88, "sexual_harassment"),
    (r"\b(send|show|gimme|give me) (nudes|pics|photos|pictures)( of yourself| now)?\b",
     "Sexual harassment - unwanted sexual demand", 0.92, "sexual_harassment"),

    # -------------------------------------------------------------------
    # Dismissal and exclusion
    # -------------------------------------------------------------------
    (r"why (are|r) (you|u) even (talking|speaking|here)",
     "Dismissive exclusion - questioning someone's right to speak", 0.7, "exclusion"),
    (r"who (asked|wants|needs)( for)? (you|u|your)",
     "Dismissive rejection - invalidating someone's input", 0.75, "dismissive"),
    (r"\bdid (anyone|anybody) ask( you)?\b",
     "Rhetorical dismissal - questioning right to speak", 0.73, "dismissive"),
    (r"nobody (asked|wants|cares|needs) (you|u|your)",
     "Strong dismissal - complete invalidation", 0.85, "dismissive"),
    (r"(shut up|be quiet|stop talking)",
     "Silencing attempt", 0.6, "silencing"),
    (r"go away|leave (us|here)|get (out|lost)",
     "Direct exclusion", 0.7, "exclusion"),

    # Questioning worth / belonging
    (r"why (do|would) (you|u) even",
     "Questioning someone's actions/worth", 0.65, "worth_attack"),
    (r"(you|u) (don't|dont|do not) belong",
     "Exclusion - denying belonging", 0.8, "exclusion"),
    (r"what (are|r) (you|u) doing here",
     "Questioning right to be present", 0.7, "exclusion"),

    # Passive aggression
    (r"(really|seriously)\?+ *(you|u)",
     "Sarcastic disbelief - passive aggression", 0.5, "passive_aggressive"),
    (r"(you|u) (think|thought) (that|this) (was|is)",
     "Mocking someone's judgment", 0.6, "mocking"),
    (r"imagine (being|thinking)",
     "Mocking hypothetical", 0.55, "mocking"),
    (r"(actually|finally) posted (that|this).*brave",
     "Sarcastic praise - passive aggressive", 0.6, "passive_aggressive"),
    (r"(i['’]d|i would|id) be (so )?ashamed if i (was|were) (you|u)",
     "Shaming - condescension", 0.75, "shaming"),
    (r"ruin(ed|s)? the (mood|vibe|fun)",
     "Blaming for ruining atmosphere", 0.65, "exclusion"),
    (r"(funny|hilarious) how (you|u) think (you|u) matter",
     "Minimization of worth", 0.8, "worth_attack"),
    (r"(seeking|desperate for) attention",
     "Accusation of attention seeking", 0.7, "harassment"),
    (r"attention seeking",
     "Labeling as attention seeker", 0.7, "harassment"),
    (r"(keep|start) crying (about it)?",
     "Dismissive mocking of distress", 0.75, "harassment"),
    (r"cry (more|about it)",
     "Dismissive mocking", 0.7, "harassment"),

    # -------------------------------------------------------------------
    # Competence / intelligence attacks
    # -------------------------------------------------------------------
    (r"(you|u) (can't|cant|cannot) even",
     "Competence attack", 0.65, "competence_attack"),
    (r"(you|u) (don't|dont) (know|understand)",
     "Intelligence dismissal", 0.6, "competence_attack"),
    (r"\b(you|u|you're|youre|ur) (are|r) (so |really |very |such a |such an )?(stupid|dumb|idiot|moron|retard|retarded|imbecile|fool|foolish)\b",
     "Direct intelligence insult - calling someone stupid/dumb/idiot", 0.78, "intelligence_attack"),
    (r"\b(you|u) (are|r) (so |really |very )?stupid (that|and)",
     "Stupid declaration with continuation", 0.75, "intelligence_attack"),
    (r"\b(so|such a|what a|you're a) (stupid|dumb|idiot|moron) (person|kid|boy|girl|guy)\b",
     "Labeling as stupid/dumb person", 0.76, "intelligence_attack"),
    (r"\b(stop being|quit being|you're being) (so )?(stupid|dumb|idiotic|moronic)\b",
     "Behavioral intelligence attack", 0.72, "intelligence_attack"),

    # Shaming
    (r"\b(you|u) (are|r) (such )?(an? )?(embarrassment|disgrace|disappointment|failure)\b",
     "Identity shaming - labeling as embarrassment/disgrace", 0.85, "shaming"),
    (r"\b(you|u|you're|youre) (are |r )?(so |really |very |such an? )?(embarrassing|pathetic|disgusting|shameful)\b",
     "Shaming - calling someone embarrassing/pathetic", 0.8, "shaming"),
    (r"\bashamed of (you|u)\b",
     "Shaming - expressing shame about person", 0.8, "shaming"),
    (r"\b(you|u) should be ashamed\b",
     "Direct shame command", 0.75, "shaming"),
    (r"\b(so|such a|what a) (loser|failure|disappointment)\b",
     "Labeling as loser/failure", 0.78, "shaming"),

    # -------------------------------------------------------------------
    # Social rejection
    # -------------------------------------------------------------------
    (r"nobody (likes|wants|needs) (you|u)",
     "Social rejection", 0.85, "rejection"),
    (r"everyone (hates|dislikes|ignores) (you|u)",
     "Universal rejection claim", 0.9, "rejection"),
    (r"\b(we|everyone|they) (were|was|are) (all )?(happier|better off) (before|without) (you|u)",
     "Social exclusion - claiming group was better without person", 0.82, "exclusion"),
    (r"\b(everyone|we|they|people) voted (you|u) (out|off|away)",
     "Group voting rejection", 0.85, "exclusion"),
    (r"\b(everyone|we all|the group|they) (voted|agreed|decided) (that )?(you|u) (shouldn't|shouldnt|should not|cant|cannot) (be|join|stay)",
     "Group exclusion decision - collective rejection", 0.88, "exclusion"),
    (r"\b(you|u) (shouldn't|shouldnt|should not|dont|can't|cant) be (part of|in|here|with)",
     "Exclusion statement - denying right to participate", 0.8, "exclusion"),
    (r"\b(everyone|they|people) (laughs|laugh|mock|mocks|is laughing|are laughing) at (you|u)",
     "Social mockery - claiming group ridicule", 0.82, "harassment"),
    (r"\b(laughs|laughing) at (you|u) behind (your|ur) back",
     "Behind back mockery - secret ridicule claim", 0.85, "harassment"),

    # Existence / visibility
    (r"(you|u) (are|r) (invisible|invincible|invicible|nothing)",
     "Denying existence/relevance", 0.8, "exclusion"),
    (r"(you|u) (don't|dont) (exist|matter)",
     "Denying existence", 0.85, "existential_threat"),
    (r"like (you|u) (aren't|arent|aint) (even )?there",
     "Treating as invisible", 0.75, "exclusion"),

    # Worthlessness
    (r"(you|u) (are|r) (no good|not good|useless|worthless|a waste)",
     "Worth attack", 0.85, "worth_attack"),
    (r"waste of (space|time|air)",
     "Existential dismissal", 0.9, "existential_threat"),

    # -------------------------------------------------------------------
    # Existence attacks ("your existence is a burden")
    # -------------------------------------------------------------------
    (r"(your|ur|you are|youre) (very )?existence (is|was) (a )?(burden|waste|mistake|problem|useless)",
     "Existence attack - declaring someone's existence is a burden", 0.95, "existential_threat"),
    (r"(your|ur) existence (itself )?(is|was|has been) (just )?(burden|waste)",
     "Direct existence burden attack", 0.95, "existential_threat"),
    (r"\b(your|ur|you)\b.{0,20}\bexistence\b.{0,20}\b(is|was)\b.{0,20}\b(burden|waste|mistake)\b",
     "Personal existence attack with context", 0.92, "existential_threat"),
    (r"existence (is|was|seems) (a )?(burden|waste|mistake)",
     "Implied existence attack", 0.9, "existential_threat"),
    (r"\b(you're|youre|you are|ur) (just |such |a total )?(a )?mistake\b",
     "Personal mistake declaration - you are a mistake", 0.80, "existence_attack"),
    (r"\b(you|u) (are|r) (just |such )?(a )?burden\b(?! on (the|this) (project|team|system|work))",
     "Personal burden declaration", 0.85, "worth_attack"),
    (r"\b(you|u) (are|r) (just |such )?(a )?(weight|burden) (on|to) (this |the )?(world|society|everyone|people|us)",
     "Weight/burden to world or society - existential attack", 0.65, "existential_threat"),
    (r"(you|u) (are|r) (just )?(a )?burden (on|to) (me|us|everyone|others|them|people|society)",
     "Burden on people declaration", 0.88, "worth_attack"),
    (r"(being|existing) (is|was) (a )?burden",
     "Existence as burden statement", 0.85, "existential_threat"),
    (r"world (would be|is) better (off )?without (you|u)",
     "Existence negation - world better without you", 0.95, "existential_threat"),
    (r"(everyone|we|people) (would be|are) better (off )?without (you|u)",
     "Social existence negation", 0.92, "existential_threat"),
    (r"(your|ur) (very )?presence (is|was) (a )?(burden|problem|issue)",
     "Presence attack - similar to existence", 0.88, "exclusion"),
    (r"\b(your|ur) presence (makes|ruins|destroys) (everything|things|it all)",
     "Presence destruction claim", 0.85, "exclusion"),
    (r"\bmakes everything (worse|bad|terrible|awful) (for )?(everyone|us|people)",
     "Negative impact claim on group", 0.8, "exclusion"),
    (r"shouldn'?t (even )?exist",
     "Existence denial", 0.92, "existential_threat"),
    (r"regret (your|you) (existing|being born)",
     "Existence regret attack", 0.9, "existential_threat"),

    # -------------------------------------------------------------------
    # Dehumanization
    # -------------------------------------------------------------------
    (r"\b(you|u) (are|r) (just )?(a |an )?(piece of )?(trash|garbage|waste|filth|scum|dirt)\b",
     "Dehumanization - comparing to trash/waste", 0.88, "dehumanization"),
    (r"\b(you|u) (are|r) (such )?(a |an )?(mistake|accident|error|problem)\b",
     "Dehumanization - calling someone a mistake", 0.85, "dehumanization"),
    (r"\b(you|u) (are|r) (just )?(nothing|nobody|worthless|insignificant)\b",
     "Dehumanization - reducing to nothing", 0.83, "dehumanization"),
    (r"\b(you|u) look like (a |an )?(trash|garbage|disaster|car crash|train wreck|dumpster|wreck|mess|something .{0,20}threw up)\b",
     "Appearance-based dehumanization - look like trash/disaster", 0.82, "appearance_attack"),
    (r"\b(you|u) look like (shit|crap|ass|garbage)\b",
     "Crude appearance attack", 0.80, "appearance_attack"),
    (r"\b(you|u) (are|r) (worse|lower|less) than (trash|garbage|shit|nothing|dirt|scum|filth|waste)\b",
     "Comparative degradation - worse than trash/garbage", 0.82, "dehumanization"),

    # Comparative inferiority
    (r"\b(my |a |even a )?(dog|cat|bot|child|baby|toddler|pet) (is |plays |does |performs )?(better|smarter|faster) than (you|u)\b",
     "Comparative inferiority - comparing unfavorably to animals/objects", 0.77, "comparison_attack"),
    (r"\b(you're|you are|ur) the (worst|dumbest|stupidest|ugliest|most stupid|most useless|most pathetic|biggest loser) (person|thing|human|player|student)\b",
     "Superlative insult - claiming someone is the worst/dumbest", 0.85, "superlative_insult"),
    (r"\b(you|u) (are|r) the (worst|dumbest|ugliest|stupidest|most useless) .{0,30}(i have|i've|ive) (ever )?(seen|met|known)\b",
     "Comparative inferiority - superlative negative comparison", 0.85, "comparative_insult"),
    (r"\beven (a |an )?(child|baby|idiot|moron) (could|can|knows) .{0,30}(better than you|more than you)\b",
     "Comparative inferiority - even X is better", 0.76, "comparative_insult"),
    (r"\b(your|ur) (future|brain|head|mind|thoughts|ideas) (is|are) (as )?(empty|blank|void|useless|dumb|stupid|worthless)\b",
     "Comparative insult - attacking intelligence/future as empty/worthless", 0.82, "comparative_insult"),
    (r"\b(empty|blank|dumb|stupid|useless) as (your|ur) (brain|head|future|mind)\b",
     "Comparative insult - empty/dumb as your brain", 0.82, "comparative_insult"),
    (r"\b(your|ur) (brain|head|mind) is (empty|blank|useless|void|nothing)\b",
     "Direct brain/intelligence attack - empty brain", 0.80, "intelligence_attack"),
    (r"\b(as|more) (stupid|dumb|ugly|worthless|pathetic|useless) as\b",
     "Comparative insult structure", 0.75, "comparative_insult"),

    # Mild personal attacks
    (r"\b(you|u) (are|r) (such )?(a |an )?bad (boy|girl|person|kid|child|student)\b",
     "Mild personal attack - bad boy/girl/person", 0.25, "mild_insult"),
    (r"\b(you|u) (are|r) (just |really |so |very )?(bad|wrong)\b(?! (at|for|about|with))",
     "Generic 'you are bad' - borderline mild insult", 0.12, "borderline_mild"),
    (r"\b(you|u) (are|r) (just |such |a total )?(a )?weight\b(?! (lifting|training|loss|gain|class|room))",
     "Personal burden insult - calling someone a weight", 0.60, "burden_insult"),

    # -------------------------------------------------------------------
    # Sarcasm and backhanded compliments
    # -------------------------------------------------------------------
    (r"\b(have you considered|you should try) (plastic surgery|therapy|medication|help)\b",
     "Sarcastic concern - false concern attack", 0.72, "passive_aggressive"),
    (r"\b(i'm |i am )?(worried|concerned) about (your|you) (mental health|sanity|brain)\b",
     "Sarcastic concern - fake worry about mental state", 0.70, "passive_aggressive"),
    (r"\b(you're|you are|youre) (actually |really |kinda )?(pretty|nice|good|smart|cool|brave) for (someone|a person) (like you|who|with|of your)\b",
     "Backhanded compliment - praise with qualifier", 0.75, "backhanded_compliment"),
    (r"\b(you're|youre|you are) (pretty|quite|kinda|sort of|relatively) (smart|good|nice|cool|brave|talented) (for )?(someone|a person) (like you|who|with|of your)\b",
     "Backhanded compliment - qualified praise with insult", 0.75, "backhanded_compliment"),
    (r"\bi love how (you|u) (just |always )?(wear|do|say|post|think) (anything|whatever|that)\b",
     "Sarcastic praise - mock appreciation", 0.68, "sarcastic_praise"),
    (r"\b(wow|oh|nice|great|good|amazing) (job|work|going|move|play)?,? (genius|einstein|sherlock|smarty|champ)\b",
     "Sarcastic praise - mock celebration", 0.70, "sarcastic_praise"),
    (r"\b(wow|nice|great) (job|work) .{0,30}(ruining|destroying|messing up|screwing up)",
     "Sarcastic praise - mock celebration of failure", 0.75, "sarcastic_praise"),
    (r"\b(at least|well) you (tried|attempted|did something)\b",
     "Condescending praise - patronizing", 0.65, "condescension"),
    (r"\bthat's (so |really |very )?(brave|bold|interesting) of you\b",
     "Sarcastic appreciation - mock admiration", 0.63, "sarcastic_praise"),

    # Gaming community taunts
    (r"\b(lol|lmao|haha|rofl)\s+(noob|newb|n00b|scrub|bot)\b",
     "Gaming mockery - laughing at skill level", 0.35, "gaming_taunt"),
    (r"\b(git|get)\s+(gud|good)\s+(noob|newb|scrub|bot|kid)\b",
     "Gaming condescension - mocking skill", 0.35, "gaming_condescension"),
    (r"\b(ez|easy)\s+(clap|win|game|gg)\s+(noob|scrub|loser|bot)\b",
     "Gaming taunt - declaring easy victory over opponent", 0.25, "gaming_victory_taunt"),

    # -------------------------------------------------------------------
    # Obfuscation that survives de-leeting
    # -------------------------------------------------------------------
    (r"k[i!1][l|1][l|1]\s*(y[o0][u*]|ur?s[e3][l|1][f|v])",
     "CRITICAL: Obfuscated suicide encouragement (leetspeak)", 1.0, "obfuscated_threat"),
    (r"f[*_u@]c?k\s*(y[o0@][u*]|off)",
     "Obfuscated profanity (leetspeak)", 0.70, "obfuscated_insult"),
    (r"(sh[i!1][t*]|cr[a@]p|d[a@]mn|[a@]ss?h[o0][l|1][e3])",
     "Obfuscated profanity", 0.65, "obfuscated_insult"),
    # A run of 3+ identical letters with at least two letters on each side
    (r"(?<=[a-z]{2})([a-z])\1{2,}(?=[a-z]{2})",
     "Potential obfuscated word with character repetition", 0.45, "obfuscated_text"),

    # Emoji threats
    (r"(\U0001F52B|\U0001F5E1️?|\U0001F52A|⚰️?|\U0001F480|☠️?).{0,10}(you|u|\U0001F449|@)",
     "Emoji violence - weapon/death emojis directed at person", 0.85, "emoji_threat"),
    (r"(you|u|\U0001F449).{0,10}(\U0001F52B|\U0001F5E1|\U0001F52A|⚰|\U0001F480|☠)",
     "Emoji violence - targeting person with threat emojis", 0.85, "emoji_threat"),
    (r"\U0001F921.{0,10}(\U0001F52B|\U0001F480|⚰)",
     "Emoji mockery with violence", 0.75, "emoji_harassment"),
]


def build_catalog(rules: List[Tuple[str, str, float, str]] = PATTERN_RULES) -> Tuple[SemanticPattern, ...]:
    """Compile pattern rules into an immutable catalog."""
    return tuple(
        SemanticPattern(
            pattern=re.compile(regex, re.IGNORECASE),
            meaning=meaning,
            severity=severity,
            category=category,
        )
        for regex, meaning, severity, category in rules
    )


# Built once at import; shared read-only by every matcher instance
SEMANTIC_PATTERNS: Tuple[SemanticPattern, ...] = build_catalog()
