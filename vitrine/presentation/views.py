from rest_framework.views import APIView
from rest_framework.response import Response
from rest_framework import status

from vitrine.core import dependency_injection as di
from vitrine.core import pricing
from vitrine.core.entities import PaymentMethod, ShippingOption
from vitrine.core.exceptions import (
    AuthenticationRequiredError,
    CheckoutInProgressError,
    EmptyCartError,
    GatewayError,
    ItemNaoEncontradoError,
    MissingAddressError,
    SubmissionError,
)
from .serializers import (
    AddressSerializer,
    AdicionarItemSerializer,
    AtualizarQuantidadeSerializer,
    CartSerializer,
    CheckoutSerializer,
    NovoEnderecoSerializer,
    OpcaoSerializer,
    OpcoesCheckoutSerializer,
    OrderSerializer,
    ResumoCheckoutSerializer,
)


# ====================================================================
# VIEWS: Orquestram a requisição, a execução dos casos de uso e a resposta.
# ====================================================================

def token_da_requisicao(request):
    """Extrai o token Bearer repassado pelo front-end (None se ausente)."""
    cabecalho = request.headers.get('Authorization', '')
    if cabecalho.startswith('Bearer '):
        return cabecalho[len('Bearer '):].strip() or None
    return None


def resposta_erro(erro, codigo, http_status, **extra):
    return Response({'code': codigo, 'message': erro.message, **extra}, status=http_status)


def resposta_carrinho(carrinho, http_status=status.HTTP_200_OK):
    return Response(CartSerializer(carrinho).data, status=http_status)


# ====================================================================
# VIEWS DO CARRINHO
# ====================================================================

class CarrinhoAPIView(APIView):
    """
    API View para o carrinho da sessão atual.
    """

    def get(self, request):
        """Retorna o carrinho com os totais derivados."""
        return resposta_carrinho(di.get_cart_store(request.session))

    def delete(self, request):
        """Esvazia o carrinho."""
        carrinho = di.get_cart_store(request.session)
        carrinho.clear()
        return resposta_carrinho(carrinho)


class CarrinhoItensAPIView(APIView):
    """Adiciona um produto ao carrinho."""

    def post(self, request):
        serializer = AdicionarItemSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        catalogo = di.get_catalog_gateway(token_da_requisicao(request))
        try:
            produto = catalogo.find_by_id(serializer.validated_data['product_id'])
        except ItemNaoEncontradoError as e:
            return resposta_erro(e, 'produto_nao_encontrado', status.HTTP_404_NOT_FOUND)
        except AuthenticationRequiredError as e:
            return resposta_erro(e, 'nao_autenticado', status.HTTP_401_UNAUTHORIZED)
        except GatewayError as e:
            return resposta_erro(e, 'catalogo_indisponivel', status.HTTP_502_BAD_GATEWAY)

        carrinho = di.get_cart_store(request.session)
        carrinho.add_item(produto, serializer.validated_data['quantity'])
        return resposta_carrinho(carrinho, status.HTTP_201_CREATED)


class CarrinhoItemAPIView(APIView):
    """Atualiza a quantidade ou remove um item do carrinho."""

    def patch(self, request, product_id):
        serializer = AtualizarQuantidadeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        carrinho = di.get_cart_store(request.session)
        carrinho.update_quantity(product_id, serializer.validated_data['quantity'])
        return resposta_carrinho(carrinho)

    def delete(self, request, product_id):
        carrinho = di.get_cart_store(request.session)
        carrinho.remove_item(product_id)
        return resposta_carrinho(carrinho)


# ====================================================================
# VIEWS PARA CHECKOUT
# ====================================================================

class OpcoesCheckoutAPIView(APIView):
    """Formas de entrega e de pagamento disponíveis, com os rótulos de exibição."""

    def get(self, request):
        return Response({
            'shipping_methods': OpcaoSerializer(list(ShippingOption), many=True).data,
            'payment_methods': OpcaoSerializer(list(PaymentMethod), many=True).data,
            'free_shipping_threshold': str(pricing.FREE_SHIPPING_THRESHOLD),
        })


class ResumoCheckoutAPIView(APIView):
    """Resumo de valores para as opções escolhidas (recalculado a cada exibição)."""

    def get(self, request):
        serializer = OpcoesCheckoutSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)

        carrinho = di.get_cart_store(request.session)
        valores = pricing.quote(
            carrinho.get_subtotal(),
            serializer.validated_data['shipping_method'],
            serializer.validated_data['payment_method'],
        )
        return Response(ResumoCheckoutSerializer(valores).data)


class CheckoutAPIView(APIView):
    """
    API View para finalizar a compra.
    """

    def post(self, request):
        serializer = CheckoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        dados = serializer.validated_data

        token = token_da_requisicao(request)
        carrinho = di.get_cart_store(request.session)

        # Pré-condições antes de qualquer chamada remota
        if carrinho.is_empty():
            return resposta_erro(EmptyCartError(), 'carrinho_vazio', status.HTTP_400_BAD_REQUEST)
        if not dados.get('address_id'):
            return resposta_erro(MissingAddressError(), 'endereco_ausente', status.HTTP_400_BAD_REQUEST)

        try:
            endereco = di.get_address_gateway(token).find_by_id(dados['address_id'])
        except ItemNaoEncontradoError:
            return resposta_erro(MissingAddressError(), 'endereco_ausente', status.HTTP_400_BAD_REQUEST)
        except AuthenticationRequiredError as e:
            return resposta_erro(e, 'nao_autenticado', status.HTTP_401_UNAUTHORIZED)
        except GatewayError as e:
            return resposta_erro(e, 'servico_indisponivel', status.HTTP_502_BAD_GATEWAY, retryable=True)

        montador = di.get_order_assembler(token)
        try:
            pedido_id = montador.finalize_purchase(
                carrinho, endereco, dados['shipping_method'], dados['payment_method']
            )
        except (EmptyCartError, MissingAddressError) as e:
            codigo = 'carrinho_vazio' if isinstance(e, EmptyCartError) else 'endereco_ausente'
            return resposta_erro(e, codigo, status.HTTP_400_BAD_REQUEST)
        except CheckoutInProgressError as e:
            return resposta_erro(e, 'checkout_em_andamento', status.HTTP_409_CONFLICT)
        except SubmissionError as e:
            if e.status_code == status.HTTP_401_UNAUTHORIZED:
                return resposta_erro(e, 'nao_autenticado', status.HTTP_401_UNAUTHORIZED)
            return resposta_erro(e, 'falha_envio', status.HTTP_502_BAD_GATEWAY, retryable=e.retryable)

        return Response({'order_id': pedido_id}, status=status.HTTP_201_CREATED)


# ====================================================================
# ENDEREÇOS DE ENTREGA (seleção no checkout)
# ====================================================================

class EnderecosAPIView(APIView):
    """Lista e cadastra os endereços do cliente autenticado."""

    def get(self, request):
        enderecos_service = di.get_address_gateway(token_da_requisicao(request))
        try:
            enderecos = enderecos_service.find_all_by_user()
        except AuthenticationRequiredError as e:
            return resposta_erro(e, 'nao_autenticado', status.HTTP_401_UNAUTHORIZED)
        except GatewayError as e:
            return resposta_erro(e, 'servico_indisponivel', status.HTTP_502_BAD_GATEWAY, retryable=True)
        return Response(AddressSerializer(enderecos, many=True).data)

    def post(self, request):
        serializer = NovoEnderecoSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        enderecos_service = di.get_address_gateway(token_da_requisicao(request))
        try:
            criado = enderecos_service.create(serializer.save())
        except AuthenticationRequiredError as e:
            return resposta_erro(e, 'nao_autenticado', status.HTTP_401_UNAUTHORIZED)
        except GatewayError as e:
            return resposta_erro(e, 'servico_indisponivel', status.HTTP_502_BAD_GATEWAY, retryable=True)
        return Response(AddressSerializer(criado).data, status=status.HTTP_201_CREATED)


class EnderecoAPIView(APIView):
    """Remove um endereço do cliente."""

    def delete(self, request, address_id):
        enderecos_service = di.get_address_gateway(token_da_requisicao(request))
        try:
            enderecos_service.remove(address_id)
        except ItemNaoEncontradoError as e:
            return resposta_erro(e, 'endereco_nao_encontrado', status.HTTP_404_NOT_FOUND)
        except AuthenticationRequiredError as e:
            return resposta_erro(e, 'nao_autenticado', status.HTTP_401_UNAUTHORIZED)
        except GatewayError as e:
            return resposta_erro(e, 'servico_indisponivel', status.HTTP_502_BAD_GATEWAY, retryable=True)
        return Response(status=status.HTTP_204_NO_CONTENT)


# ====================================================================
# HISTÓRICO DE PEDIDOS
# ====================================================================

class PedidosAPIView(APIView):
    """Pedidos do cliente autenticado, do mais recente para o mais antigo."""

    def get(self, request):
        use_case = di.get_listar_pedidos_use_case(token_da_requisicao(request))
        try:
            pedidos = use_case.executar()
        except AuthenticationRequiredError as e:
            return resposta_erro(e, 'nao_autenticado', status.HTTP_401_UNAUTHORIZED)
        except GatewayError as e:
            return resposta_erro(e, 'servico_indisponivel', status.HTTP_502_BAD_GATEWAY, retryable=True)
        return Response(OrderSerializer(pedidos, many=True).data)
