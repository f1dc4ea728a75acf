from jaxbridge.plugins import CAPABILITIES, CodeGeneratorPlugin, ResponsePlugin
from jaxbridge.templating import render_js

# modal dialogs and messages
#
# The commands are library neutral; the client script only falls
# back to window.alert(). Pages using a dialog library replace the
# jaxon.dialog object with one that has the same three functions
# (show, hide, message).
#
class DialogPlugin(ResponsePlugin, CodeGeneratorPlugin):
    capabilities = CAPABILITIES.RESPONSE_PLUGIN | CAPABILITIES.CODE_GENERATOR

    NAME = 'dialog'

    MESSAGE_TYPES = ('success', 'info', 'warning', 'error')

    def get_script(self):
        return render_js('jaxbridge/dialog.js')

    # buttons is a list of { 'title': ..., 'class': ..., 'click': ... }
    def show(self, title, content, buttons = None, options = None):
        self.add_command({ 'cmd': 'dialog.show' }, {
                'title': title,
                'content': content,
                'buttons': buttons or [],
                'options': options or {},
            })
        return self

    def hide(self):
        self.add_command({ 'cmd': 'dialog.hide' }, '')
        return self

    def message(self, message_type, message, title = ''):
        self.add_command({ 'cmd': 'dialog.message', 'type': message_type }, { 'message': message, 'title': title })
        return self

    def success(self, message, title = ''):
        return self.message('success', message, title)

    def info(self, message, title = ''):
        return self.message('info', message, title)

    def warning(self, message, title = ''):
        return self.message('warning', message, title)

    def error(self, message, title = ''):
        return self.message('error', message, title)
