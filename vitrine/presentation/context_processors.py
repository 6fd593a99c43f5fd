"""
Context processors para a aplicação presentation.
"""
from vitrine.core import dependency_injection as di


def carrinho_context(request):
    """
    Adiciona o badge do carrinho (quantidade e subtotal) ao contexto global dos templates.
    """
    if not hasattr(request, 'session'):
        return {}

    carrinho = di.get_cart_store(request.session)
    return {
        'quantidade_itens': carrinho.get_total_items(),
        'subtotal_carrinho': carrinho.get_subtotal(),
    }
