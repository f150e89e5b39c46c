from .grammar import GrammarNode
from .interfaces import ParseTreeListener


class ParseTreeWalker:
    """Depth first walk over a grammar node, notifying the listener on the way
    in and on the way out of every node.
    """
    @staticmethod
    def walk(listener: ParseTreeListener, node: GrammarNode):
        listener.enter(node)
        for child in node.children():
            ParseTreeWalker.walk(listener, child)
        listener.exit(node)
