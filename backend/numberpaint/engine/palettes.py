"""Preset brand palettes for the fixed-palette quantization path.

RGB values approximate each manufacturer's published swatches.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class PresetColor:
    name: str
    rgb: tuple[int, int, int]
    code: str | None = None


@dataclass
class PresetPalette:
    id: str
    label: str
    brand: str
    medium: str
    colors: list[PresetColor] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.colors)

    @property
    def rgb(self) -> list[tuple[int, int, int]]:
        return [c.rgb for c in self.colors]


def _dedup(colors: list[PresetColor]) -> list[PresetColor]:
    """Drop colors whose RGB value already appeared earlier in the list."""
    seen: set[tuple[int, int, int]] = set()
    result: list[PresetColor] = []
    for c in colors:
        if c.rgb in seen:
            continue
        seen.add(c.rgb)
        result.append(c)
    return result


# ---------------------------------------------------------------------------
# Crayola crayons
# ---------------------------------------------------------------------------

_CRAYOLA_8 = [
    PresetColor("Red", (237, 10, 63)),
    PresetColor("Orange", (255, 136, 51)),
    PresetColor("Yellow", (251, 232, 112)),
    PresetColor("Green", (1, 163, 104)),
    PresetColor("Blue", (0, 102, 255)),
    PresetColor("Violet", (131, 89, 163)),
    PresetColor("Brown", (175, 89, 62)),
    PresetColor("Black", (0, 0, 0)),
]

_CRAYOLA_16_EXTRAS = [
    PresetColor("Red-Orange", (255, 63, 52)),
    PresetColor("Yellow-Orange", (255, 174, 66)),
    PresetColor("Yellow-Green", (197, 225, 122)),
    PresetColor("Blue-Green", (0, 149, 183)),
    PresetColor("Blue-Violet", (100, 86, 183)),
    PresetColor("Red-Violet", (187, 51, 133)),
    PresetColor("Carnation Pink", (255, 166, 201)),
    PresetColor("White", (255, 255, 255)),
]

_CRAYOLA_24_EXTRAS = [
    PresetColor("Scarlet", (253, 14, 53)),
    PresetColor("Apricot", (253, 213, 177)),
    PresetColor("Green-Yellow", (241, 231, 136)),
    PresetColor("Cerulean", (2, 164, 211)),
    PresetColor("Indigo", (79, 105, 198)),
    PresetColor("Violet-Red", (247, 70, 138)),
    PresetColor("Gray", (139, 134, 128)),
    PresetColor("Bluetiful", (60, 105, 231)),
]

_CRAYOLA_32_EXTRAS = [
    PresetColor("Chestnut", (185, 78, 72)),
    PresetColor("Peach", (255, 203, 164)),
    PresetColor("Tan", (250, 157, 90)),
    PresetColor("Melon", (254, 186, 173)),
    PresetColor("Sky Blue", (118, 215, 234)),
    PresetColor("Cadet Blue", (169, 178, 195)),
    PresetColor("Wisteria", (201, 160, 220)),
    PresetColor("Timberwolf", (217, 214, 207)),
]

_CRAYOLA_48_EXTRAS = [
    PresetColor("Mahogany", (202, 52, 53)),
    PresetColor("Olive Green", (181, 179, 92)),
    PresetColor("Spring Green", (236, 235, 189)),
    PresetColor("Granny Smith Apple", (157, 224, 147)),
    PresetColor("Sea Green", (147, 223, 184)),
    PresetColor("Cornflower", (147, 204, 234)),
    PresetColor("Purple Mountains' Majesty", (128, 113, 180)),
    PresetColor("Lavender", (251, 174, 210)),
    PresetColor("Mauvelous", (240, 145, 169)),
    PresetColor("Macaroni and Cheese", (255, 185, 123)),
    PresetColor("Goldenrod", (252, 214, 103)),
    PresetColor("Salmon", (255, 145, 164)),
    PresetColor("Burnt Sienna", (233, 116, 81)),
    PresetColor("Sepia", (158, 91, 64)),
    PresetColor("Raw Sienna", (210, 125, 70)),
    PresetColor("Tumbleweed", (222, 166, 129)),
]

_CRAYOLA_64_EXTRAS = [
    PresetColor("Maroon", (195, 33, 72)),
    PresetColor("Brick Red", (198, 45, 66)),
    PresetColor("Bittersweet", (254, 111, 94)),
    PresetColor("Burnt Orange", (255, 112, 52)),
    PresetColor("Asparagus", (123, 160, 91)),
    PresetColor("Forest Green", (95, 167, 119)),
    PresetColor("Robin's Egg Blue", (0, 204, 204)),
    PresetColor("Turquoise Blue", (108, 218, 231)),
    PresetColor("Pacific Blue", (0, 157, 196)),
    PresetColor("Periwinkle", (195, 205, 230)),
    PresetColor("Orchid", (226, 156, 210)),
    PresetColor("Plum", (132, 49, 121)),
    PresetColor("Wild Strawberry", (255, 51, 153)),
    PresetColor("Magenta", (246, 83, 166)),
    PresetColor("Tickle Me Pink", (252, 128, 165)),
    PresetColor("Gold", (230, 190, 138)),
    PresetColor("Silver", (201, 192, 187)),
]

_CRAYOLA_96_EXTRAS = [
    PresetColor("Mango Tango", (255, 59, 41)),
    PresetColor("Vivid Tangerine", (255, 153, 128)),
    PresetColor("Outrageous Orange", (255, 96, 55)),
    PresetColor("Atomic Tangerine", (255, 153, 102)),
    PresetColor("Neon Carrot", (255, 153, 51)),
    PresetColor("Sunglow", (255, 204, 51)),
    PresetColor("Unmellow Yellow", (255, 238, 102)),
    PresetColor("Inchworm", (222, 227, 39)),
    PresetColor("Laser Lemon", (230, 255, 102)),
    PresetColor("Electric Lime", (204, 255, 0)),
    PresetColor("Screamin' Green", (102, 255, 102)),
    PresetColor("Shamrock", (51, 204, 153)),
    PresetColor("Jungle Green", (41, 171, 135)),
    PresetColor("Tropical Rain Forest", (0, 117, 94)),
    PresetColor("Pine Green", (1, 121, 111)),
    PresetColor("Midnight Blue", (0, 51, 102)),
    PresetColor("Navy Blue", (0, 102, 204)),
    PresetColor("Denim", (21, 96, 189)),
    PresetColor("Wild Blue Yonder", (122, 137, 184)),
    PresetColor("Royal Purple", (107, 63, 160)),
    PresetColor("Fuchsia", (193, 84, 193)),
    PresetColor("Shocking Pink", (255, 110, 255)),
    PresetColor("Razzle Dazzle Rose", (238, 52, 210)),
    PresetColor("Hot Magenta", (255, 0, 204)),
    PresetColor("Purple Pizzazz", (255, 0, 187)),
    PresetColor("Red-Violet", (187, 51, 133)),  # repeats the 16-count entry
    PresetColor("Cerise", (218, 50, 135)),
    PresetColor("Razzmatazz", (227, 11, 92)),
    PresetColor("Jazzberry Jam", (165, 11, 94)),
    PresetColor("Radical Red", (255, 53, 94)),
    PresetColor("Wild Watermelon", (253, 91, 120)),
    PresetColor("Copper", (218, 138, 103)),
]

_CRAYOLA_120_EXTRAS = [
    PresetColor("Sunset Orange", (254, 76, 64)),
    PresetColor("Banana Mania", (251, 231, 178)),
    PresetColor("Canary", (255, 255, 153)),
    PresetColor("Fern", (99, 183, 108)),
    PresetColor("Mountain Meadow", (26, 179, 133)),
    PresetColor("Caribbean Green", (0, 204, 153)),
    PresetColor("Aquamarine", (149, 224, 232)),
    PresetColor("Outer Space", (45, 56, 58)),
    PresetColor("Blue Bell", (153, 153, 204)),
    PresetColor("Manatee", (141, 144, 161)),
    PresetColor("Purple Heart", (101, 45, 193)),
    PresetColor("Vivid Violet", (128, 55, 144)),
    PresetColor("Pink Flamingo", (253, 116, 253)),
    PresetColor("Eggplant", (97, 64, 81)),
    PresetColor("Cotton Candy", (255, 183, 213)),
    PresetColor("Piggy Pink", (253, 215, 228)),
    PresetColor("Blush", (219, 80, 121)),
    PresetColor("Pink Sherbert", (247, 163, 142)),
    PresetColor("Fuzzy Wuzzy", (135, 66, 31)),
    PresetColor("Beaver", (146, 111, 91)),
    PresetColor("Desert Sand", (237, 201, 175)),
    PresetColor("Almond", (238, 217, 196)),
    PresetColor("Shadow", (131, 112, 80)),
    PresetColor("Antique Brass", (200, 138, 101)),
]


# ---------------------------------------------------------------------------
# Winsor & Newton Cotman watercolours
# ---------------------------------------------------------------------------

_COTMAN_24 = [
    PresetColor("Lemon Yellow Hue", (255, 249, 110), "346"),
    PresetColor("Cadmium Yellow Hue", (255, 218, 42), "109"),
    PresetColor("Naples Yellow Hue", (255, 228, 148), "422"),
    PresetColor("Cadmium Orange Hue", (255, 152, 0), "090"),
    PresetColor("Cadmium Red Hue", (218, 51, 31), "095"),
    PresetColor("Alizarin Crimson", (185, 30, 65), "004"),
    PresetColor("Permanent Rose", (227, 51, 113), "502"),
    PresetColor("Yellow Ochre", (214, 157, 47), "744"),
    PresetColor("Raw Sienna", (196, 123, 45), "552"),
    PresetColor("Burnt Sienna", (180, 78, 35), "074"),
    PresetColor("Burnt Umber", (110, 54, 24), "076"),
    PresetColor("Vandyke Brown", (66, 38, 18), "676"),
    PresetColor("Terre Verte", (97, 138, 107), "637"),
    PresetColor("Sap Green", (78, 133, 69), "599"),
    PresetColor("Viridian Hue", (40, 143, 116), "696"),
    PresetColor("Hookers Green Dark", (30, 82, 61), "312"),
    PresetColor("Prussian Blue", (0, 52, 118), "538"),
    PresetColor("Cobalt Blue Hue", (57, 105, 185), "178"),
    PresetColor("Ultramarine", (26, 48, 185), "660"),
    PresetColor("Cerulean Blue Hue", (89, 175, 223), "139"),
    PresetColor("Paynes Gray", (48, 60, 80), "465"),
    PresetColor("Ivory Black", (34, 30, 30), "331"),
    PresetColor("Chinese White", (249, 249, 249), "150"),
    PresetColor("Permanent Sap Green", (65, 122, 53), "503"),
]

_COTMAN_45_EXTRAS = [
    PresetColor("Raw Umber", (115, 82, 45), "580"),
    PresetColor("Red Ochre", (172, 83, 48), "557"),
    PresetColor("Light Red", (209, 112, 84), "362"),
    PresetColor("Indian Red", (160, 68, 65), "317"),
    PresetColor("Alizarin Crimson Hue", (179, 26, 55), "004"),
    PresetColor("Permanent Carmine", (186, 22, 68), "507"),
    PresetColor("Quinacridone Magenta", (204, 35, 122), "545"),
    PresetColor("Permanent Violet", (138, 55, 158), "733"),
    PresetColor("Cadmium Lemon", (255, 245, 60), "120"),
    PresetColor("Scarlet Lake", (218, 38, 38), "540"),
    PresetColor("Rose Madder Hue", (224, 90, 115), "730"),
    PresetColor("Green (Permanent)", (50, 150, 80), "394"),
    PresetColor("Phthalo Green", (15, 122, 100), "522"),
    PresetColor("Cobalt Green", (15, 138, 109), "235"),
    PresetColor("Intense Blue", (0, 64, 170), "329"),
    PresetColor("Ultramarine (Deep)", (17, 32, 160), "663"),
    PresetColor("Coeruleum Blue Hue", (55, 168, 215), "140"),
    PresetColor("Indigo", (52, 44, 108), "327"),
    PresetColor("Cadmium Yellow Deep Hue", (255, 190, 0), "084"),
    PresetColor("Burnt Sienna (deep)", (160, 58, 20), "025"),
    PresetColor("Permanent Yellow Deep", (252, 200, 0), "470"),
]


# ---------------------------------------------------------------------------
# Tombow Dual Brush markers
# ---------------------------------------------------------------------------

_TOMBOW_96 = [
    # Greys & neutrals
    PresetColor("Light Gray", (219, 221, 222), "N15"),
    PresetColor("Light Gray 2", (197, 200, 202), "N25"),
    PresetColor("Medium Gray", (152, 155, 156), "N45"),
    PresetColor("Medium Gray 2", (127, 130, 132), "N55"),
    PresetColor("Dark Gray", (100, 103, 105), "N65"),
    PresetColor("Dark Gray 2", (72, 75, 77), "N75"),
    PresetColor("Warm Black", (44, 44, 48), "N89"),
    PresetColor("Black", (25, 25, 30), "N95"),
    # Yellows
    PresetColor("Burnt Orange", (204, 85, 0), "020"),
    PresetColor("Persimmon", (237, 83, 44), "025"),
    PresetColor("Antique Gold", (201, 161, 99), "055"),
    PresetColor("Light Sand", (254, 245, 200), "061"),
    PresetColor("Pale Yellow", (253, 249, 180), "062"),
    PresetColor("Canary Yellow", (255, 237, 0), "063"),
    PresetColor("Process Yellow", (255, 221, 0), "065"),
    PresetColor("Chartreuse", (195, 214, 0), "076"),
    # Oranges / light reds
    PresetColor("Pale Cherry", (251, 178, 163), "026"),
    PresetColor("Warm Beige", (233, 213, 190), "946"),
    PresetColor("Sand Beige", (222, 196, 161), "947"),
    PresetColor("Coral", (252, 144, 107), "977"),
    PresetColor("Orange", (255, 130, 0), "985"),
    PresetColor("Tangerine", (255, 110, 0), "993"),
    PresetColor("Vermilion", (255, 76, 0), "996"),
    # Reds / pinks
    PresetColor("Carmine", (211, 31, 85), "090"),
    PresetColor("Geranium", (244, 57, 74), "095"),
    PresetColor("Raspberry", (212, 43, 101), "096"),
    PresetColor("Scarlet", (228, 31, 31), "100"),
    PresetColor("Lipstick Red", (211, 16, 43), "123"),
    PresetColor("Sandy Flesh", (252, 213, 170), "133"),
    PresetColor("Flesh", (252, 205, 169), "158"),
    PresetColor("Dusty Rose", (210, 147, 163), "723"),
    PresetColor("Rose", (248, 161, 195), "733"),
    PresetColor("Rose Red", (237, 80, 154), "743"),
    PresetColor("Coral Red", (238, 105, 102), "755"),
    PresetColor("Carmine (deep)", (203, 57, 66), "765"),
    PresetColor("Crimson", (167, 39, 74), "775"),
    PresetColor("Baby Pink", (255, 202, 215), "800"),
    PresetColor("Garnet", (163, 46, 59), "840"),
    PresetColor("Light Pink", (249, 186, 204), "895"),
    PresetColor("Pink Punch", (255, 121, 148), "969"),
    # Purples / violets
    PresetColor("Light Violet", (198, 137, 185), "623"),
    PresetColor("Orchid", (192, 121, 183), "625"),
    PresetColor("Lilac", (175, 148, 199), "636"),
    PresetColor("Red Violet", (170, 52, 126), "643"),
    PresetColor("Thistle", (196, 158, 204), "673"),
    PresetColor("Purple", (102, 49, 140), "685"),
    PresetColor("Wisteria", (147, 121, 183), "703"),
    PresetColor("Periwinkle Blue", (132, 140, 191), "706"),
    PresetColor("Mauve", (183, 118, 149), "725"),
    PresetColor("Violet", (147, 53, 161), "772"),
    PresetColor("Grape", (108, 52, 121), "793"),
    # Blues
    PresetColor("Marine Blue", (0, 93, 142), "451"),
    PresetColor("Azure Blue", (0, 103, 164), "452"),
    PresetColor("Cobalt Blue", (0, 80, 152), "476"),
    PresetColor("Royal Blue", (0, 57, 150), "493"),
    PresetColor("Cyan", (0, 178, 227), "526"),
    PresetColor("Light Blue", (108, 194, 225), "533"),
    PresetColor("Peacock Blue", (0, 140, 194), "553"),
    PresetColor("Process Blue", (0, 108, 183), "555"),
    PresetColor("Cerulean Blue", (57, 155, 211), "565"),
    PresetColor("Ultramarine Blue", (23, 68, 161), "575"),
    PresetColor("Powder Blue", (165, 210, 232), "533"),
    # Greens
    PresetColor("Light Green", (140, 198, 108), "173"),
    PresetColor("Olive", (152, 163, 91), "195"),
    PresetColor("Sap Green", (72, 147, 88), "243"),
    PresetColor("Avocado", (93, 138, 64), "245"),
    PresetColor("Jade Green", (0, 138, 93), "249"),
    PresetColor("Bright Green", (0, 176, 73), "291"),
    PresetColor("Spearmint", (0, 169, 157), "296"),
    PresetColor("Yellow Green", (144, 190, 68), "346"),
    PresetColor("Peacock Green", (0, 152, 121), "393"),
    PresetColor("Teal", (0, 128, 127), "407"),
    PresetColor("Hunter Green", (0, 83, 57), "456"),
    # Warm neutrals / browns
    PresetColor("Light Ochre", (221, 174, 99), "873"),
    PresetColor("Brown", (152, 103, 68), "879"),
    PresetColor("Walnut", (106, 68, 42), "899"),
    PresetColor("Olive Green (warm)", (130, 120, 75), "942"),
    PresetColor("Chocolate", (105, 55, 20), "977"),
    # Singles
    PresetColor("Wine Red", (155, 18, 61), "127"),
    PresetColor("Peach Cream", (245, 195, 158), "158"),
    PresetColor("Blossom Pink", (255, 187, 195), "026"),
    PresetColor("Yellow Ochre", (214, 168, 0), "195"),
    PresetColor("Lime Green", (172, 215, 60), "173"),
    PresetColor("Blue Green", (0, 153, 136), "296"),
    PresetColor("Sky Blue", (90, 175, 224), "452"),
    PresetColor("Pale Blue", (192, 224, 240), "533"),
    PresetColor("Cornflower", (100, 149, 217), "565"),
    PresetColor("Light Purple", (204, 178, 215), "636"),
    PresetColor("Blue Violet", (113, 93, 168), "703"),
    PresetColor("Pink Blush", (235, 178, 193), "723"),
    PresetColor("Sienna", (178, 108, 64), "879"),
    PresetColor("Kraft Brown", (154, 118, 73), "942"),
]


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

_CRAYOLA_SETS = [
    (8, [_CRAYOLA_8]),
    (16, [_CRAYOLA_16_EXTRAS]),
    (24, [_CRAYOLA_24_EXTRAS]),
    (48, [_CRAYOLA_32_EXTRAS, _CRAYOLA_48_EXTRAS]),
    (64, [_CRAYOLA_64_EXTRAS]),
    (96, [_CRAYOLA_96_EXTRAS]),
    (120, [_CRAYOLA_120_EXTRAS]),
]


def _crayola_presets() -> list[PresetPalette]:
    """Each box holds every color of the smaller boxes plus its own extras."""
    presets = []
    colors: list[PresetColor] = []
    for count, extras in _CRAYOLA_SETS:
        for group in extras:
            colors.extend(group)
        presets.append(
            PresetPalette(f"crayola-{count}", f"Crayola {count}-count", "Crayola", "Crayon", _dedup(colors))
        )
    return presets


PRESET_PALETTES: list[PresetPalette] = [
    *_crayola_presets(),
    PresetPalette(
        "cotman-24",
        "Winsor & Newton Cotman 24-pan",
        "Winsor & Newton",
        "Watercolor",
        _dedup(_COTMAN_24),
    ),
    PresetPalette(
        "cotman-45",
        "Winsor & Newton Cotman 45-pan",
        "Winsor & Newton",
        "Watercolor",
        _dedup(_COTMAN_24 + _COTMAN_45_EXTRAS),
    ),
    PresetPalette(
        "tombow-96",
        "Tombow Dual Brush 96-pack",
        "Tombow",
        "Marker",
        _dedup(_TOMBOW_96),
    ),
]


def find_preset_palette(palette_id: str) -> PresetPalette | None:
    """Look up a palette by id (e.g. 'crayola-8')."""
    for p in PRESET_PALETTES:
        if p.id == palette_id:
            return p
    return None


def preset_brands() -> list[str]:
    """Distinct brand names in registry order."""
    return list(dict.fromkeys(p.brand for p in PRESET_PALETTES))


def palettes_for_brand(brand: str) -> list[PresetPalette]:
    return [p for p in PRESET_PALETTES if p.brand == brand]
