# type: ignore
''' PBPU assembly grammar '''

import pyparsing as pp

from pbpu.common.ops import Op
from pbpu.pasm.fpp import FPP


def to_int(r):
    text = r[0].lower()

    if text.startswith('0x'):
        return int(text, 16)

    return int(text)


id = pp.Word(pp.alphas + '_', pp.alphanums + '_')
comment = pp.Literal('//') + pp.rest_of_line

number = pp.Regex('0[xX][0-9a-fA-F]+|[0-9]+').setParseAction(to_int)

label = (id + pp.Suppress(':')).setParseAction(lambda r: (FPP.on_label, r[0]))


def g_cmd(op: Op):
    return (pp.CaselessKeyword(op.name) + pp.Optional(number, default=0)) \
        .setParseAction(lambda r: (FPP.issue_op, (op, r[1])))


def g_directive(literal: str, operand, func):
    return (pp.Suppress(pp.CaselessKeyword(literal)) + operand) \
        .setParseAction(lambda r: (func, r[0]))


instruction = pp.Or([g_cmd(op) for op in Op])

# Directives
byte_dir = g_directive('.byte', number, FPP.issue_byte)
goto_dir = g_directive('.goto', id, FPP.issue_goto)
loc_dir = g_directive('.loc', number, FPP.issue_loc)

statement = label ^ instruction ^ byte_dir ^ goto_dir ^ loc_dir

program = pp.ZeroOrMore(statement)
program.ignore(comment)
