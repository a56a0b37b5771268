from pathway_cards.util.util import SeenItems
