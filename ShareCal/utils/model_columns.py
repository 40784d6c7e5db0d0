# ------------ Model Description Columns ------------ #
branch = "Branch"
technology = "Technology"
parameter = "Parameter"
context = "Context"
directive = "Directive"

node_columns = [branch, technology, parameter, context, directive]

# ------------ Directives ------------ #
delete = "delete"
nocreate = "nocreate"
fillout = "fillout"

valid_directives = [delete, nocreate, fillout]
