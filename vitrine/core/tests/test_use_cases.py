import unittest
from unittest.mock import Mock

from vitrine.core.cart import CartStore
from vitrine.core.entities import (
    Address, Order, OrderReceipt, PaymentMethod, ShippingOption
)
from vitrine.core.exceptions import (
    CheckoutInProgressError,
    EmptyCartError,
    GatewayError,
    MissingAddressError,
    SubmissionError,
)
from vitrine.core.money import Money
from vitrine.core.tests.fakes import ArmazenamentoEmMemoria, produto
from vitrine.core.use_cases import ListarPedidosDoUsuarioUseCase, OrderAssembler, TravaEmMemoria


class TestOrderAssembler(unittest.TestCase):

    def setUp(self):
        """
        Monta o caso de uso com um serviço de pedidos simulado (Mock)
        e um carrinho com dois produtos.
        """
        self.order_service_mock = Mock()
        self.order_service_mock.create.return_value = OrderReceipt(id=321, status=201)
        self.use_case = OrderAssembler(order_service=self.order_service_mock)

        self.storage = ArmazenamentoEmMemoria()
        self.carrinho = CartStore(self.storage)
        self.carrinho.add_item(produto(id=1, preco='100.00'), 1)
        self.carrinho.add_item(produto(id=2, preco='19.90'), 2)

        self.endereco = Address(
            id=7, street='Rua Teste, 100', zip_code='01234-567',
            city='São Paulo', state='SP', country='Brasil',
        )

    def _estado_do_carrinho(self):
        return [(item.product.id, item.quantity) for item in self.carrinho.items], dict(self.storage.dados)

    def test_finalizar_com_sucesso_limpa_o_carrinho(self):
        # ACT
        pedido_id = self.use_case.finalize_purchase(
            self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
        )

        # ASSERT
        self.assertEqual(pedido_id, 321)
        self.assertTrue(self.carrinho.is_empty())
        self.assertEqual(self.storage.dados, {})
        self.order_service_mock.create.assert_called_once()

    def test_pedido_montado_com_valores_do_motor_de_precos(self):
        self.use_case.finalize_purchase(
            self.carrinho, self.endereco, ShippingOption.EXPRESS, PaymentMethod.BOLETO
        )

        draft = self.order_service_mock.create.call_args.args[0]
        # subtotal 139.80 + frete expresso 25.00
        self.assertEqual(draft.total_price, Money.of('164.80'))
        self.assertIs(draft.shipping_method, ShippingOption.EXPRESS)
        self.assertIs(draft.payment_method, PaymentMethod.BOLETO)
        self.assertIs(draft.address, self.endereco)
        self.assertEqual([(i.product.id, i.quantity, i.price) for i in draft.items], [
            (1, 1, Money.of('100.00')),
            (2, 2, Money.of('19.90')),
        ])

    def test_pix_desconta_total_e_cada_linha(self):
        """
        Cenário: com PIX o desconto de 5% entra no total E no preço unitário de
        cada linha enviada. Se a API somar as linhas, o desconto é aplicado duas
        vezes; este teste fixa o comportamento atual até a regra ser confirmada.
        """
        self.use_case.finalize_purchase(
            self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.PIX
        )

        draft = self.order_service_mock.create.call_args.args[0]
        # 139.80 + 10.00 - 6.99
        self.assertEqual(draft.total_price, Money.of('142.81'))
        self.assertEqual([i.price for i in draft.items], [Money.of('95.00'), Money.of('18.91')])

    def test_carrinho_vazio_falha_sem_chamada_de_rede(self):
        self.carrinho.clear()

        with self.assertRaises(EmptyCartError):
            self.use_case.finalize_purchase(
                self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.PIX
            )

        self.order_service_mock.create.assert_not_called()

    def test_sem_endereco_falha_sem_chamada_de_rede(self):
        antes = self._estado_do_carrinho()

        with self.assertRaises(MissingAddressError):
            self.use_case.finalize_purchase(
                self.carrinho, None, ShippingOption.STANDARD, PaymentMethod.PIX
            )

        self.order_service_mock.create.assert_not_called()
        self.assertEqual(self._estado_do_carrinho(), antes)

    def test_falha_de_rede_preserva_o_carrinho(self):
        """
        Cenário: o serviço de pedidos está fora do ar. O erro chega como
        SubmissionError e o carrinho fica exatamente como estava.
        """
        # ARRANGE
        self.order_service_mock.create.side_effect = GatewayError("timeout")
        antes = self._estado_do_carrinho()

        # ACT & ASSERT
        with self.assertRaises(SubmissionError) as ctx:
            self.use_case.finalize_purchase(
                self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
            )

        self.assertTrue(ctx.exception.retryable)
        self.assertEqual(self._estado_do_carrinho(), antes)
        self.assertFalse(self.use_case.busy)

    def test_status_diferente_de_201_nao_conta_como_sucesso(self):
        self.order_service_mock.create.return_value = OrderReceipt(id=None, status=200)
        antes = self._estado_do_carrinho()

        with self.assertRaises(SubmissionError) as ctx:
            self.use_case.finalize_purchase(
                self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
            )

        self.assertEqual(ctx.exception.status_code, 200)
        self.assertEqual(self._estado_do_carrinho(), antes)

    def test_novo_envio_durante_envio_em_andamento_e_rejeitado(self):
        """
        Cenário: um segundo clique chega enquanto o primeiro envio ainda não voltou.
        """
        segundo_envio = {}

        def criar(draft):
            with self.assertRaises(CheckoutInProgressError):
                self.use_case.finalize_purchase(
                    self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
                )
            segundo_envio['busy'] = self.use_case.busy
            return OrderReceipt(id=1, status=201)

        self.order_service_mock.create.side_effect = criar

        self.use_case.finalize_purchase(
            self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
        )

        self.assertTrue(segundo_envio['busy'])
        self.assertFalse(self.use_case.busy)
        self.order_service_mock.create.assert_called_once()

    def test_envio_concorrente_de_outra_requisicao_e_rejeitado(self):
        """
        Cenário: cada requisição monta o seu OrderAssembler; o marcador
        compartilhado faz o segundo envio do mesmo carrinho ser recusado.
        """
        trava = TravaEmMemoria()
        primeiro = OrderAssembler(self.order_service_mock, trava)
        segundo = OrderAssembler(self.order_service_mock, trava)
        resultado = {}

        def criar(draft):
            with self.assertRaises(CheckoutInProgressError):
                segundo.finalize_purchase(
                    self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
                )
            resultado['segundo_busy'] = segundo.busy
            return OrderReceipt(id=9, status=201)

        self.order_service_mock.create.side_effect = criar

        pedido_id = primeiro.finalize_purchase(
            self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
        )

        self.assertEqual(pedido_id, 9)
        self.assertFalse(resultado['segundo_busy'])
        self.order_service_mock.create.assert_called_once()

    def test_marcador_liberado_apos_falha(self):
        trava = TravaEmMemoria()
        use_case = OrderAssembler(self.order_service_mock, trava)
        self.order_service_mock.create.side_effect = GatewayError("timeout")

        with self.assertRaises(SubmissionError):
            use_case.finalize_purchase(
                self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.CREDIT
            )

        self.assertTrue(trava.acquire(self.carrinho.cart_id))

    def test_pedido_criado_sem_id_e_registrado_no_log(self):
        """
        Cenário: 201 sem corpo. O pedido existe no servidor, o carrinho é limpo,
        mas o id devolvido é None e fica um aviso no log.
        """
        self.order_service_mock.create.return_value = OrderReceipt(id=None, status=201)

        with self.assertLogs('vitrine.core.use_cases', level='WARNING') as logs:
            pedido_id = self.use_case.finalize_purchase(
                self.carrinho, self.endereco, ShippingOption.PICKUP, PaymentMethod.BOLETO
            )

        self.assertIsNone(pedido_id)
        self.assertTrue(self.carrinho.is_empty())
        self.assertIn('sem id', logs.output[0])

    def test_chave_de_idempotencia_estavel_para_o_mesmo_carrinho(self):
        primeiro = self.use_case.build_draft(
            self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.PIX
        )
        repetido = self.use_case.build_draft(
            self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.PIX
        )
        self.carrinho.update_quantity(1, 3)
        alterado = self.use_case.build_draft(
            self.carrinho, self.endereco, ShippingOption.STANDARD, PaymentMethod.PIX
        )

        self.assertEqual(primeiro.idempotency_key, repetido.idempotency_key)
        self.assertNotEqual(primeiro.idempotency_key, alterado.idempotency_key)
        self.assertTrue(primeiro.idempotency_key.startswith(self.carrinho.cart_id))


class TestListarPedidosDoUsuario(unittest.TestCase):

    def test_pedidos_mais_recentes_primeiro(self):
        order_service_mock = Mock()
        antigo = Order(id=1, total_price=Money.of('10'), payment_method='pix', shipping_method='pickup', address=None)
        recente = Order(id=2, total_price=Money.of('20'), payment_method='credit', shipping_method='standard', address=None)
        order_service_mock.find_all_by_user.return_value = [antigo, recente]

        pedidos = ListarPedidosDoUsuarioUseCase(order_service_mock).executar()

        self.assertEqual([p.id for p in pedidos], [2, 1])
