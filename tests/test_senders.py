from __future__ import annotations

from queuegraph.ast.types import ClassIndex, TypeResolver
from queuegraph.config import AnalyzerConfig
from queuegraph.extract.senders import extract_senders, senders_in_file
from queuegraph.graph.model import QueueKey, Role

from conftest import parse_ts


def _senders(source: str, config: AnalyzerConfig | None = None):
    parsed = parse_ts(source, "service.ts")
    return senders_in_file(parsed, TypeResolver(ClassIndex.from_files([parsed])), config)


def test_constructor_injected_service_is_recognised() -> None:
    records = _senders(
        """
        @Injectable()
        export class OrderService {
            constructor(private readonly rmq: RMQService) {}

            async create(dto: CreateOrderDto) {
                const payload = { id: dto.id };
                await this.rmq.send(Queues.ORDERS, payload);
            }
        }
        """
    )
    assert len(records) == 1
    record = records[0]
    assert (record.class_name, record.name, record.role) == ("OrderService", "create", Role.SENDER)
    assert record.queue == QueueKey.symbolic("Queues.ORDERS")
    assert record.file.endswith("service.ts")


def test_field_declarations_and_initialisers() -> None:
    records = _senders(
        """
        class Publisher {
            private rmq: RMQService;
            private other = new RMQService();
            private client: HttpClient;

            publish() {
                this.rmq.send('a', {});
                this.other.send('b', {});
                this.client.send('c', {});
            }
        }
        """
    )
    assert [r.queue.display for r in records] == ["a", "b"]


def test_parameters_locals_and_aliases() -> None:
    records = _senders(
        """
        class Worker {
            constructor(private readonly rmq: RMQService) {}

            viaParameter(service: RMQService) {
                service.send('param', {});
            }

            viaLocal() {
                const local: RMQService = this.factory();
                local.send('local', {});
            }

            viaAlias() {
                const alias = this.rmq;
                alias.send('alias', {});
            }

            viaCast() {
                (this.anything as RMQService).send('cast', {});
            }
        }
        """
    )
    assert [(r.name, r.queue.display) for r in records] == [
        ("viaParameter", "param"),
        ("viaLocal", "local"),
        ("viaAlias", "alias"),
        ("viaCast", "cast"),
    ]


def test_send_on_other_types_or_unresolved_targets_is_ignored() -> None:
    records = _senders(
        """
        class Mailer {
            constructor(private readonly mail: MailService, plain: RMQService) {}

            notify(socket: WebSocket) {
                this.mail.send('welcome', {});
                socket.send('ping');
                this.unknown.send('ghost', {});
                send('bare', {});
                this.plain.send('not-a-property', {});
            }
        }
        """
    )
    assert records == []


def test_type_must_match_exactly() -> None:
    records = _senders(
        """
        class Publisher {
            constructor(
                private readonly a: RMQServiceMock,
                private readonly b: RMQService<Events>,
                private readonly c: RMQService,
            ) {}

            run() {
                this.a.send('a', {});
                this.b.send('b', {});
                this.c.send('c', {});
            }
        }
        """
    )
    assert [r.queue.display for r in records] == ["c"]


def test_multiple_sends_yield_multiple_records() -> None:
    records = _senders(
        """
        class Saga {
            constructor(private readonly rmq: RMQService) {}

            run() {
                this.rmq.send('first', {});
                items.forEach((item) => this.rmq.send(Queues.ITEMS, item));
                this.rmq.send('first', {});
                this.rmq.send(queueName, {});
                this.rmq.notify('other', {});
            }
        }
        """
    )
    assert [r.queue.display for r in records] == ["first", "Queues.ITEMS", "first"]
    assert {r.name for r in records} == {"run"}


def test_inherited_members_resolve_across_files() -> None:
    base = parse_ts(
        """
        export abstract class BasePublisher {
            constructor(protected readonly rmq: RMQService) {}
        }
        """,
        "base.publisher.ts",
    )
    child = parse_ts(
        """
        export class InvoicePublisher extends BasePublisher {
            publish() {
                return this.rmq.send('invoices.issued', {});
            }
        }
        """,
        "invoice.publisher.ts",
    )
    records = extract_senders([base, child])
    assert [(r.class_name, r.queue.display) for r in records] == [("InvoicePublisher", "invoices.issued")]


def test_inheritance_cycles_terminate() -> None:
    parsed = parse_ts(
        """
        class A extends B { run() { this.rmq.send('a', {}); } }
        class B extends A {}
        """
    )
    assert extract_senders([parsed]) == []


def test_configured_service_type_and_method() -> None:
    config = AnalyzerConfig(service_type="AmqpConnection", send_method="publish")
    records = _senders(
        """
        class Publisher {
            constructor(private readonly amqp: AmqpConnection) {}

            run() {
                this.amqp.publish('exchange', {});
                this.amqp.send('ignored', {});
            }
        }
        """,
        config,
    )
    assert [r.queue.display for r in records] == ["exchange"]


def test_awaited_generic_send_is_recognised() -> None:
    records = _senders(
        """
        class OrderService {
            constructor(private readonly rmq: RMQService) {}

            async create(payload: CreateOrderDto) {
                await this.rmq.send<CreateOrderDto, OrderCreated>(Queues.ORDERS, payload);
                const reply = await this.rmq.send<any, any>('orders.audit', payload);
                await this.rmq.notify<any>('ignored', payload);
            }
        }
        """
    )
    assert [r.queue.display for r in records] == ["Queues.ORDERS", "orders.audit"]


def test_parameters_of_nested_functions_are_in_scope() -> None:
    records = _senders(
        """
        class Fanout {
            run(services: RMQService[]) {
                services.forEach((svc: RMQService) => svc.send('arrow', {}));
                services.forEach(function (inner: RMQService) {
                    inner.send('function', {});
                });
                services.forEach((svc) => svc.send('untyped', {}));
            }
        }
        """
    )
    assert [r.queue.display for r in records] == ["arrow", "function"]


def test_locals_resolve_to_the_declaration_in_scope() -> None:
    records = _senders(
        """
        class Router {
            constructor(private readonly rmq: RMQService) {}

            route(flag: boolean, other: HttpClient) {
                if (flag) {
                    const client: HttpClient = other;
                    client.send('inner', {});
                }
                const client: RMQService = this.rmq;
                client.send('outer', {});
            }

            later() {
                target.send('before', {});
                const target: RMQService = this.rmq;
            }
        }
        """
    )
    assert [(r.name, r.queue.display) for r in records] == [("route", "outer")]
