from django import forms


class StringListField(forms.Field):
    """Accept a list of strings or a single string; always clean to a list.

    Comma separated strings are split, blanks dropped and duplicates removed
    while keeping the original order.
    """

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if isinstance(value, str):
            items = value.split(",")
        elif isinstance(value, (list, tuple, set)):
            items = list(value)
        else:
            raise forms.ValidationError("Expected a list of values.", code="invalid")

        out = []
        seen = set()
        for item in items:
            if item is None:
                continue
            text = str(item).strip()
            if text and text.lower() not in seen:
                out.append(text)
                seen.add(text.lower())
        return out

    def validate(self, value):
        if self.required and not value:
            raise forms.ValidationError(self.error_messages["required"], code="required")
