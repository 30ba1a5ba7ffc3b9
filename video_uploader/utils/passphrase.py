import secrets

WORDS = [
    'amber', 'anchor', 'apple', 'arrow', 'aspen', 'autumn', 'badge', 'bamboo',
    'basil', 'beacon', 'birch', 'bison', 'blossom', 'breeze', 'brook', 'cactus',
    'candle', 'canyon', 'cedar', 'cello', 'cherry', 'cider', 'clover', 'comet',
    'copper', 'coral', 'cotton', 'crane', 'daisy', 'delta', 'dune', 'ember',
    'falcon', 'fern', 'fiddle', 'flint', 'forest', 'fossil', 'garnet', 'ginger',
    'glacier', 'harbor', 'hazel', 'heron', 'indigo', 'island', 'ivory', 'jasper',
    'juniper', 'kettle', 'lantern', 'lemon', 'linen', 'lotus', 'maple', 'marble',
    'meadow', 'mint', 'nectar', 'oasis', 'olive', 'orchid', 'otter', 'pebble',
    'pepper', 'pine', 'plum', 'prairie', 'quartz', 'quill', 'raven', 'reed',
    'river', 'saffron', 'sage', 'sparrow', 'spruce', 'summit', 'thistle', 'tulip',
    'velvet', 'violet', 'walnut', 'willow', 'winter', 'yarrow', 'zephyr', 'zinnia',
]


def generate(num_words=4, separator='_'):
    """Random passphrase such as ``cedar_otter_quill_amber``"""
    return separator.join(secrets.choice(WORDS) for _ in range(num_words))
