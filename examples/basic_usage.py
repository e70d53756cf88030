"""
Basic pikegen usage: build a small type graph in code and render it.
"""

from pikegen import (
    ClassProperty,
    ClassType,
    PikeRenderer,
    PrimitiveType,
    TypeGraph,
    TypeKind,
    UnionType,
)


def main():
    person = ClassType("Person")
    person.set_properties([
        ClassProperty("name", PrimitiveType(TypeKind.STRING)),
        ClassProperty("age", PrimitiveType(TypeKind.INTEGER)),
        ClassProperty(
            "nickname",
            UnionType((PrimitiveType(TypeKind.NULL), PrimitiveType(TypeKind.STRING))),
        ),
    ])

    graph = TypeGraph({"Person": person})
    print(PikeRenderer(graph).render().text)


if __name__ == "__main__":
    main()
